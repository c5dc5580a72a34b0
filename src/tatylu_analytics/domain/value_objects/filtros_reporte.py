"""Value Object con los filtros de un reporte personalizado."""
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tatylu_analytics.domain.services.montos import to_number
from tatylu_analytics.domain.services.periodos import parse_fecha, start_of_month
from tatylu_analytics.domain.value_objects.granularidad import Granularidad
from tatylu_analytics.domain.value_objects.tipo_reporte import TipoReporte


def flag_activo(valor: Any) -> bool:
    """Un flag solo se desactiva con False o "false"."""
    if valor is False:
        return False
    if isinstance(valor, str) and valor.strip().lower() == "false":
        return False
    return True


def _limite_opcional(valor: Any) -> float | None:
    if valor is None or valor == "":
        return None
    return to_number(valor, 0.0)


@dataclass(frozen=True)
class FiltrosReporte:
    """
    Configuración de un reporte personalizado.

    Se construye de forma permisiva con `desde_dict`: valores fuera de rango
    se ajustan y valores desconocidos toman el default, nunca se rechazan.
    """

    periodo_inicio: datetime
    periodo_fin: datetime
    estado: str = ""
    categoria: str = ""
    agrupar_por: Granularidad = Granularidad.MES
    top_n: int = 5
    incluir_impuestos: bool = True
    incluir_envio: bool = True
    total_minimo: float | None = None
    total_maximo: float | None = None
    tipo: TipoReporte = TipoReporte.CUSTOM
    enfoque: str = "top_revenue"

    @classmethod
    def desde_dict(
        cls,
        datos: Mapping[str, Any] | None,
        ahora: datetime,
        top_n_default: int = 5,
        top_n_max: int = 50,
    ) -> "FiltrosReporte":
        """
        Construye filtros desde el body crudo de la petición.

        Args:
            datos: Body con claves camelCase (periodStart, topN, ...)
            ahora: Momento de referencia para los defaults de fechas
            top_n_default: topN cuando no se envía o no es numérico
            top_n_max: Límite superior de topN
        """
        datos = datos or {}
        tipo = TipoReporte.personalizado_desde_valor(datos.get("type"))

        top_n = to_number(datos.get("topN"), top_n_default)
        top_n = int(min(max(top_n, 1), top_n_max))

        return cls(
            periodo_inicio=parse_fecha(datos.get("periodStart")) or start_of_month(ahora),
            periodo_fin=parse_fecha(datos.get("periodEnd")) or ahora,
            estado=str(datos.get("status") or "").strip(),
            categoria=str(datos.get("category") or "").strip().lower(),
            agrupar_por=Granularidad.desde_valor(datos.get("groupBy")),
            top_n=top_n,
            incluir_impuestos=flag_activo(datos.get("includeTaxes")),
            incluir_envio=flag_activo(datos.get("includeShipping")),
            total_minimo=_limite_opcional(datos.get("minTotal")),
            total_maximo=_limite_opcional(datos.get("maxTotal")),
            tipo=tipo,
            enfoque=str(datos.get("focus") or tipo.enfoque_por_defecto),
        )

    def en_rango(self, fecha: datetime | None) -> bool:
        """Fecha dentro de [periodo_inicio, periodo_fin]."""
        if fecha is None:
            return False
        return self.periodo_inicio <= fecha <= self.periodo_fin

    def permite_total(self, total: float) -> bool:
        if self.total_minimo is not None and total < self.total_minimo:
            return False
        if self.total_maximo is not None and total > self.total_maximo:
            return False
        return True

    def a_dict(self) -> dict[str, Any]:
        """Filtros tal como se informan en el payload."""
        return {
            "status": self.estado or "all",
            "category": self.categoria,
            "minTotal": self.total_minimo,
            "maxTotal": self.total_maximo,
            "groupBy": self.agrupar_por.value,
            "topN": self.top_n,
            "includeTaxes": self.incluir_impuestos,
            "includeShipping": self.incluir_envio,
            "focus": self.enfoque,
        }
