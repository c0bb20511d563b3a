"""Versioned persistence of queue state against a key-value store.

Writes are fire-and-forget: the payload is serialized at call time, written
on the running event loop without being awaited (inline when no loop is
running), and any failure, encoding included, is logged instead of raised.
Reads happen once at startup; a payload with the wrong version tag or an
invalid shape is deleted rather than repaired.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from media_queue.domain.music.entities import QueueState
from media_queue.domain.shared.constants import QueueConstants
from media_queue.domain.shared.exceptions import ValidationError
from media_queue.domain.shared.messages import ErrorMessages, LogTemplates
from media_queue.infrastructure.persistence.background import BackgroundWriter

if TYPE_CHECKING:
    from media_queue.config.settings import QueueSettings
    from media_queue.domain.music.repository import KeyValueStore

logger = logging.getLogger(__name__)


class QueueStatePersistence(BackgroundWriter):
    """Serializes ``QueueState`` with a schema version and restores it on startup."""

    def __init__(self, store: KeyValueStore, settings: QueueSettings | None = None) -> None:
        super().__init__()
        self._store = store
        self._version = settings.schema_version if settings else QueueConstants.SCHEMA_VERSION
        self._state_key = settings.state_key if settings else QueueConstants.STATE_KEY
        self._version_key = settings.version_key if settings else QueueConstants.VERSION_KEY

    @property
    def version(self) -> str:
        return self._version

    # ---- Encoding ----

    def encode(self, state: QueueState) -> str:
        payload: dict[str, Any] = {"version": self._version}
        payload.update(state.model_dump(mode="json"))
        return json.dumps(payload)

    def decode(self, raw: str, version: str | None) -> QueueState:
        """Parse a stored payload.

        Raises:
            ValidationError: If the version tag or the structure is invalid.
        """
        if version != self._version:
            raise ValidationError(
                ErrorMessages.STATE_VERSION_MISMATCH.format(found=version, expected=self._version),
                field="version",
            )

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValidationError(str(e)) from e

        if not isinstance(data, dict):
            raise ValidationError(ErrorMessages.STATE_NOT_AN_OBJECT)

        if "version" in data and data["version"] != self._version:
            raise ValidationError(
                ErrorMessages.STATE_VERSION_MISMATCH.format(
                    found=data["version"], expected=self._version
                ),
                field="version",
            )

        missing = [name for name in QueueConstants.REQUIRED_STATE_FIELDS if name not in data]
        if missing:
            raise ValidationError(
                ErrorMessages.STATE_MISSING_FIELDS.format(fields=", ".join(missing))
            )

        if not isinstance(data["current_order"], list):
            raise ValidationError(ErrorMessages.STATE_ORDER_NOT_A_LIST, field="current_order")

        try:
            return QueueState.model_validate(
                {name: data[name] for name in QueueConstants.REQUIRED_STATE_FIELDS}
            )
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

    # ---- Writes ----

    def save_in_background(self, state: QueueState) -> None:
        """Schedule a write of ``state`` without blocking the caller.

        The payload is encoded before returning. Inside a running event loop
        the store write is a task; with no loop it completes inline, see
        ``BackgroundWriter``.
        """
        payload = self._encode_or_log(state)
        if payload is None:
            return
        meta = (len(state.current_order), state.current_index)
        self._run_in_background(lambda: self._write(payload, meta))

    async def save(self, state: QueueState) -> None:
        """Write ``state`` and wait for it; failures are still only logged."""
        payload = self._encode_or_log(state)
        if payload is None:
            return
        await self._write(payload, (len(state.current_order), state.current_index))

    def _encode_or_log(self, state: QueueState) -> str | None:
        try:
            return self.encode(state)
        except Exception as e:
            logger.error(LogTemplates.STATE_SAVE_FAILED, e)
            return None

    def clear_in_background(self) -> None:
        self._run_in_background(self.clear)

    async def clear(self) -> None:
        """Delete the persisted state and its version tag."""
        try:
            async with self._lock():
                await self._store.delete(self._state_key)
                await self._store.delete(self._version_key)
        except Exception as e:
            logger.error(LogTemplates.STATE_CLEAR_FAILED, e)
            return
        logger.info(LogTemplates.STATE_CLEARED)

    async def _write(self, payload: str, meta: tuple[int, int]) -> None:
        try:
            async with self._lock():
                await self._store.set(self._state_key, payload)
                await self._store.set(self._version_key, self._version)
        except Exception as e:
            logger.error(LogTemplates.STATE_SAVE_FAILED, e)
            return
        logger.debug(LogTemplates.STATE_SAVED, *meta)

    # ---- Reads ----

    async def load(self) -> QueueState | None:
        """Read the persisted state.

        Returns:
            The restored state, or None when nothing usable is stored.
        """
        try:
            raw = await self._store.get(self._state_key)
            version = await self._store.get(self._version_key)
        except Exception as e:
            logger.error(LogTemplates.STATE_LOAD_FAILED, e)
            return None

        if raw is None:
            if version is not None:
                await self.clear()
            logger.debug(LogTemplates.STATE_NOT_FOUND)
            return None

        try:
            state = self.decode(raw, version)
        except ValidationError as e:
            logger.warning(LogTemplates.STATE_DISCARDED, e.message)
            await self.clear()
            return None

        logger.info(
            LogTemplates.STATE_RESTORED,
            len(state.current_order),
            state.is_shuffled,
            state.repeat_mode.value,
        )
        return state

