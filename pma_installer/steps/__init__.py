from .step_10_refresh_index import RefreshPackageIndexStep
from .step_20_install_dependencies import DEP_ROUTINES, InstallDependenciesStep
from .step_30_configure_phpmyadmin import CONFIGURE_ROUTINES, ConfigurePhpMyAdminStep
from .step_40_configure_nginx import LAYOUTS, ConfigureNginxStep

__all__ = [
    "RefreshPackageIndexStep",
    "InstallDependenciesStep",
    "ConfigurePhpMyAdminStep",
    "ConfigureNginxStep",
    "DEP_ROUTINES",
    "CONFIGURE_ROUTINES",
    "LAYOUTS",
]
