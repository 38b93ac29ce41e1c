from .step_10_detect_docker import PATH_FRESH_INSTALL, PATH_INSTALLED_VERIFY, DetectDockerStep
from .step_20_report_existing import ReportExistingStep
from .step_25_check_compose import CheckComposeStep
from .step_30_existing_group import ExistingUserGroupStep
from .step_40_system_upgrade import SystemUpgradeStep
from .step_45_install_packages import InstallPackagesStep
from .step_50_enable_services import EnableServicesStep
from .step_55_install_compose_aur import InstallComposeAurStep
from .step_60_configure_group import ConfigureGroupStep
from .step_70_verify_install import VerificationError, VerifyInstallStep
from .step_80_smoke_test import SmokeTestStep

__all__ = [
    "PATH_FRESH_INSTALL",
    "PATH_INSTALLED_VERIFY",
    "DetectDockerStep",
    "ReportExistingStep",
    "CheckComposeStep",
    "ExistingUserGroupStep",
    "SystemUpgradeStep",
    "InstallPackagesStep",
    "EnableServicesStep",
    "InstallComposeAurStep",
    "ConfigureGroupStep",
    "VerificationError",
    "VerifyInstallStep",
    "SmokeTestStep",
]
