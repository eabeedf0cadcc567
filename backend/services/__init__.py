from .substrate_service import SubstrateService
from .proxy_service import ProxyService
from .xcm_service import XcmTransferService

__all__ = ['SubstrateService', 'ProxyService', 'XcmTransferService']
