# resources/admin/admin_media_resource.py
from flask import request
from flask.views import MethodView
from flask_smorest import Blueprint

from ...security.auth import token_required, current_user_id, get_owned_store
from ...utils.rate_limits import crud_write_limiter
from ...utils.helpers import make_log_tag
from ...utils.json_response import prepared_response
from ...utils.logger import Log
from ...utils.media.cloudinary_client import upload_image_file
from ...constants.service_code import ERROR_MESSAGES, ALLOWED_IMAGE_EXTENSIONS


blp_media = Blueprint("Media", __name__, description="Image uploads to Cloudinary")


def allowed_image(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_IMAGE_EXTENSIONS


@blp_media.route("/stores/<string:store_id>/images")
class ImageUploadResource(MethodView):

    @token_required
    @crud_write_limiter("image")
    @blp_media.doc(
        summary="Upload images",
        description="Upload one or more `images` (multipart) and receive the `{url, cloudinary_public_id}` "
                    "pairs to send with a product or billboard.",
        security=[{"Bearer": []}],
    )
    def post(self, store_id):
        log_tag = make_log_tag("admin_media_resource.py", "ImageUploadResource", "post", request.remote_addr, current_user_id(), store_id)

        files = request.files.getlist("images")
        if not files:
            return prepared_response(False, "BAD_REQUEST", "No images were uploaded.")

        rejected = [f.filename for f in files if not allowed_image(f.filename or "")]
        if rejected:
            return prepared_response(False, "BAD_REQUEST", "Unsupported image type.", errors={"images": rejected})

        try:
            if not get_owned_store(store_id):
                return prepared_response(False, "FORBIDDEN", ERROR_MESSAGES["UNAUTHORIZED"])

            uploaded = [upload_image_file(f, folder=f"stores/{store_id}") for f in files]
            Log.info(f"{log_tag} uploaded {len(uploaded)} image(s)")
            return prepared_response(True, "CREATED", "Images uploaded successfully.", data=uploaded)

        except Exception as e:
            Log.error(f"[IMAGE_POST] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])
