# Admin Resources
from .admin.admin_store_resource import blp_store
from .admin.admin_setup_resource import (
    blp_billboard, blp_category, blp_size, blp_color
)
from .admin.admin_product_resource import blp_product
from .admin.admin_order_resource import blp_order
from .admin.admin_media_resource import blp_media
