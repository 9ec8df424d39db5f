"""
Built-in sample products for protoforge.

These products exercise each construction mechanism:

- Notifications: keyed factory (centralized and delegated)
- Themes: family factory
- Documents: prototype registry
- HTTP requests: builder and directors
"""

from protoforge.builtin_products.documents import Report, Resume
from protoforge.builtin_products.http_request import (
    HttpRequest,
    HttpRequestBuilder,
    JsonPostDirector,
    json_get_recipe,
)
from protoforge.builtin_products.notifications import (
    DeliveryReceipt,
    EmailCreator,
    EmailNotification,
    PushCreator,
    PushNotification,
    SmsCreator,
    SmsNotification,
    notification_factory,
)
from protoforge.builtin_products.themes import (
    THEME_ROLES,
    DarkButton,
    DarkModal,
    DarkThemeKit,
    LightButton,
    LightModal,
    LightThemeKit,
    theme_factory,
)

__all__ = [
    # Documents
    "Report",
    "Resume",
    # HTTP
    "HttpRequest",
    "HttpRequestBuilder",
    "JsonPostDirector",
    "json_get_recipe",
    # Notifications
    "DeliveryReceipt",
    "EmailCreator",
    "EmailNotification",
    "PushCreator",
    "PushNotification",
    "SmsCreator",
    "SmsNotification",
    "notification_factory",
    # Themes
    "THEME_ROLES",
    "DarkButton",
    "DarkModal",
    "DarkThemeKit",
    "LightButton",
    "LightModal",
    "LightThemeKit",
    "theme_factory",
]
