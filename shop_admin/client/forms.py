# shop_admin/client/forms.py
"""
Dashboard form actions: the category form and the store settings form.

Every action returns a FormResult instead of raising, so a caller can show
`message` as a toast and then follow `redirect` or refresh the page.
"""
from dataclasses import dataclass
from typing import Any, Optional

from .admin_client import ApiError
from ..config import Config
from ..constants.service_code import FORM_MESSAGES
from ..utils.logger import Log


@dataclass
class FormResult:
    success: bool
    message: str
    redirect: Optional[str] = None
    refresh: bool = False
    data: Any = None


def error_message(error):
    """HTTP 500 gets its own toast; every other failure gets the generic one."""
    if isinstance(error, ApiError) and error.status_code == 500:
        return FORM_MESSAGES["INTERNAL_SERVER_ERROR"]
    return FORM_MESSAGES["GENERIC_ERROR"]


class _BaseForm:
    def __init__(self, client, store_id):
        self.client = client
        self.store_id = store_id
        self.loading = False

    def _run(self, action, log_tag):
        self.loading = True
        try:
            return action()
        except Exception as e:
            Log.error(f"{log_tag} {e}")
            return FormResult(success=False, message=error_message(e))
        finally:
            self.loading = False


class CategoryForm(_BaseForm):
    DEFAULTS = {"name": "", "billboard_id": ""}

    def __init__(self, client, store_id, initial_data=None, category_id=None):
        super().__init__(client, store_id)
        self.initial_data = initial_data
        self.category_id = category_id or (initial_data or {}).get("id")

    @property
    def editing(self):
        return self.initial_data is not None

    @property
    def title(self):
        return "Edit category" if self.editing else "Create category"

    @property
    def description(self):
        return "Edit a category" if self.editing else "Add a new Category"

    @property
    def toast_message(self):
        return "Category updated" if self.editing else "Category created"

    @property
    def action(self):
        return "Save changes" if self.editing else "Create category"

    @property
    def default_values(self):
        if self.initial_data:
            return {key: self.initial_data.get(key, "") for key in self.DEFAULTS}
        return dict(self.DEFAULTS)

    def validate(self, data):
        errors = {}
        for key in ("name", "billboard_id"):
            if not str(data.get(key) or "").strip():
                errors[key] = "This field is required."
        return errors

    def submit(self, data):
        errors = self.validate(data)
        if errors:
            return FormResult(success=False, message=FORM_MESSAGES["GENERIC_ERROR"], data=errors)

        payload = {"name": data["name"], "billboard_id": data["billboard_id"]}

        def action():
            if self.editing:
                saved = self.client.patch(f"/api/stores/{self.store_id}/categories/{self.category_id}", payload)
            else:
                saved = self.client.post(f"/api/stores/{self.store_id}/categories", payload)
            return FormResult(
                success=True,
                message=self.toast_message,
                redirect=f"/{self.store_id}/categories",
                refresh=True,
                data=saved,
            )

        return self._run(action, f"[forms.py][CategoryForm][submit][store:{self.store_id}]")

    def delete(self):
        def action():
            self.client.delete(f"/api/stores/{self.store_id}/categories/{self.category_id}")
            return FormResult(
                success=True,
                message="Category deleted",
                redirect=f"/{self.store_id}/categories/",
                refresh=True,
            )

        return self._run(action, f"[forms.py][CategoryForm][delete][store:{self.store_id}]")


class SettingsForm(_BaseForm):
    title = "Settings"
    description = "Manage store preferences"

    def __init__(self, client, store_id, initial_data=None):
        super().__init__(client, store_id)
        self.initial_data = initial_data or {"name": ""}

    def submit(self, data):
        if not str(data.get("name") or "").strip():
            return FormResult(success=False, message=FORM_MESSAGES["GENERIC_ERROR"], data={"name": "This field is required."})

        def action():
            saved = self.client.patch(f"/api/stores/{self.store_id}", {"name": data["name"]})
            return FormResult(success=True, message="Store updated", refresh=True, data=saved)

        return self._run(action, f"[forms.py][SettingsForm][submit][store:{self.store_id}]")

    def delete(self, stores=None):
        def action():
            self.client.delete(f"/api/stores/{self.store_id}")
            remaining = [store for store in stores or [] if str(store.get("id")) != str(self.store_id)]
            return FormResult(success=True, message="Store deleted", redirect="/", refresh=True, data=remaining)

        return self._run(action, f"[forms.py][SettingsForm][delete][store:{self.store_id}]")

    def api_alerts(self, origin):
        """Connection details shown on the settings page."""
        return [
            {
                "title": "STORE_URL",
                "description": f"{Config.FRONTEND_STORE_URL.rstrip('/')}/stores/{self.store_id}",
                "variant": "public",
            },
            {
                "title": "NEXT_PUBLIC_API_URL",
                "description": f"{origin.rstrip('/')}/api/stores/{self.store_id}",
                "variant": "public",
            },
        ]
