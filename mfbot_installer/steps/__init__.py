from .step_10_install_dependencies import InstallDependenciesStep
from .step_20_install_runtime import InstallRuntimeStep
from .step_30_create_directories import CreateDirectoriesStep
from .step_40_download_bot import DownloadBotStep
from .step_50_download_webinterface import DownloadWebInterfaceStep
from .step_60_setup_python_env import SetupPythonEnvStep
from .step_70_write_config import WriteConfigStep
from .step_80_write_start_scripts import WriteStartScriptsStep
from .step_90_write_service_units import WriteServiceUnitsStep
from .step_95_write_compose import WriteComposeStep

__all__ = [
    "InstallDependenciesStep",
    "InstallRuntimeStep",
    "CreateDirectoriesStep",
    "DownloadBotStep",
    "DownloadWebInterfaceStep",
    "SetupPythonEnvStep",
    "WriteConfigStep",
    "WriteStartScriptsStep",
    "WriteServiceUnitsStep",
    "WriteComposeStep",
]
