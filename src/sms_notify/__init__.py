"""
sms_notify – send a single SMS or push notification to yourself.

Import path convention::

    from sms_notify.kernel.errors import ErrorDetail, ErrorKind
    from sms_notify.kernel.types import normalize, analyze
    from sms_notify.config import detect_provider, load_credentials
    from sms_notify.application.dispatch import Dispatcher
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
