from .admin_client import AdminApiClient, ApiError, ApiConnectionError
from .forms import CategoryForm, SettingsForm, FormResult

__all__ = [
    "AdminApiClient",
    "ApiError",
    "ApiConnectionError",
    "CategoryForm",
    "SettingsForm",
    "FormResult",
]
