"""Casos de uso de la aplicación."""
from tatylu_analytics.application.use_cases.generar_reporte_snapshot import GenerarReporteSnapshot
from tatylu_analytics.application.use_cases.generar_reporte_personalizado import GenerarReportePersonalizado
from tatylu_analytics.application.use_cases.generar_proyeccion_financiera import GenerarProyeccionFinanciera
from tatylu_analytics.application.use_cases.consultar_registros import ConsultarRegistros

__all__ = [
    "GenerarReporteSnapshot",
    "GenerarReportePersonalizado",
    "GenerarProyeccionFinanciera",
    "ConsultarRegistros",
]
