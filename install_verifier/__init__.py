"""Read-only verification of installed components against their expected state."""
from install_verifier.application.use_cases import VerificationContext, VerifyInstallationUseCase, verify
from install_verifier.domain.services import ComponentVerifier
from install_verifier.domain.system_info import parse_system_info

__all__ = [
    "VerifyInstallationUseCase",
    "VerificationContext",
    "ComponentVerifier",
    "parse_system_info",
    "verify",
]
