"""Application use cases."""

from editeur.application.use_cases.confirm_top_up import (
    ConfirmTopUp,
    TopUpResult,
)
from editeur.application.use_cases.get_payer_balance import GetPayerBalance
from editeur.application.use_cases.get_service_info import (
    GetServiceInfo,
    ServiceInfo,
)
from editeur.application.use_cases.publish_content import PublishContent
from editeur.application.use_cases.register_payer import (
    RegisterPayer,
    RegistrationResult,
)

__all__ = [
    "RegisterPayer",
    "RegistrationResult",
    "ConfirmTopUp",
    "TopUpResult",
    "GetPayerBalance",
    "PublishContent",
    "GetServiceInfo",
    "ServiceInfo",
]
