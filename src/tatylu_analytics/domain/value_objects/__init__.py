"""Value Objects del dominio."""
from tatylu_analytics.domain.value_objects.granularidad import Granularidad
from tatylu_analytics.domain.value_objects.modelo_proyeccion import ModeloProyeccion
from tatylu_analytics.domain.value_objects.tipo_reporte import TipoReporte

__all__ = ["Granularidad", "ModeloProyeccion", "TipoReporte"]
