from __future__ import annotations

from dataclasses import dataclass, field

from mdpdf.domain.interfaces import IExporter, IExporterRegistry


@dataclass
class ExporterRegistryInst(IExporterRegistry):
    """
    Exporters keyed by name, in registration order (the order the window lists them).
    One instance per container; registering a name twice replaces the earlier exporter.
    """

    _reg: dict[str, IExporter] = field(default_factory=dict)

    def register(self, e: IExporter) -> None:
        self._reg[e.name] = e

    def get(self, name: str) -> IExporter:
        return self._reg[name]

    def all(self) -> list[IExporter]:
        return list(self._reg.values())

    def names(self) -> list[str]:
        return list(self._reg)

    def __contains__(self, name: object) -> bool:
        return name in self._reg
