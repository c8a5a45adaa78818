# Blueprints for the store admin
from ..resources import (
    blp_store,
    blp_billboard,
    blp_category,
    blp_size,
    blp_color,
    blp_product,
    blp_order,
    blp_media,
)


# Admin Routes
def register_admin_routes(app, api):
    blueprints = [
        blp_store,
        blp_billboard,
        blp_category,
        blp_size,
        blp_color,
        blp_product,
        blp_order,
        blp_media,
    ]

    for blueprint in blueprints:
        api.register_blueprint(blueprint, url_prefix="/api")

    # Root route
    @app.route('/')
    def index():
        return {"message": "Welcome to the Store Admin API"}
