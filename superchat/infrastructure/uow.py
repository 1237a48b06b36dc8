# superchat/infrastructure/uow.py

from typing import Any, Dict, Type

from superchat.infrastructure.data_mappers import DataMapper

DEFAULT_TIMEOUT_SECONDS = 5.0


class UoWModel:
    """Proxy that marks the wrapped ORM model dirty whenever an attribute is set."""

    def __init__(self, model: Any, uow: "UnitOfWork"):
        self.__dict__["_model"] = model
        self.__dict__["_uow"] = uow

    def __getattr__(self, key):
        return getattr(self._model, key)

    def __setattr__(self, key, value):
        setattr(self._model, key, value)
        # pending inserts are written in full on commit
        if id(self._model) not in self._uow.new:
            self._uow.register_dirty(self._model)


class UnitOfWork:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.timeout = timeout
        self.dirty: Dict[int, Any] = {}
        self.new: Dict[int, Any] = {}
        self.mappers: Dict[Type, DataMapper] = {}

    def register_dirty(self, model: Any) -> None:
        if isinstance(model, UoWModel):
            model = model._model
        model_id = id(model)
        if model_id not in self.new:
            self.dirty[model_id] = model

    def register_new(self, model: Any) -> UoWModel:
        if isinstance(model, UoWModel):
            model = model._model
        self.new[id(model)] = model
        return UoWModel(model, self)

    def discard(self) -> None:
        self.new.clear()
        self.dirty.clear()

    async def commit(self) -> None:
        """Flush pending changes through the registered mappers, inserts before updates.

        Pending state is dropped even when a write fails so a replayed
        operation starts clean.
        """
        try:
            for model in list(self.new.values()):
                await self.mappers[type(model)].insert(model)
            for model in list(self.dirty.values()):
                await self.mappers[type(model)].update(model)
        finally:
            self.discard()
