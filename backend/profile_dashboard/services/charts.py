import itertools
from typing import Optional, Protocol

from loguru import logger

from ..schemas import ChartConfig, ChartInstanceView


class ChartHandle(Protocol):
    def destroy(self) -> None:
        ...


class ChartEngine(Protocol):
    def create(self, slot: str, config: ChartConfig) -> ChartHandle:
        ...


class ChartInstance:
    """A chart materialized as its configuration, for a client-side engine to draw."""

    _ids = itertools.count(1)

    def __init__(self, slot: str, config: ChartConfig):
        self.id = next(self._ids)
        self.slot = slot
        self.config = config
        self.destroyed = False

    def destroy(self) -> None:
        self.destroyed = True

    def view(self) -> ChartInstanceView:
        return ChartInstanceView(id=self.id, slot=self.slot, config=self.config)


class DeclarativeChartEngine:
    def create(self, slot: str, config: ChartConfig) -> ChartInstance:
        return ChartInstance(slot, config)


class ChartSlot:
    """Owns at most one live chart; replacing or releasing destroys the old one."""

    def __init__(self, name: str, engine: ChartEngine):
        self.name = name
        self.engine = engine
        self.handle: Optional[ChartHandle] = None

    def render(self, config: Optional[ChartConfig]) -> Optional[ChartHandle]:
        self.release()
        if config is not None:
            self.handle = self.engine.create(self.name, config)
        return self.handle

    def release(self) -> None:
        if self.handle is not None:
            logger.debug(f"[charts] disposing {self.name} chart")
            self.handle.destroy()
            self.handle = None
