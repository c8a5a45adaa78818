# wsgi.py
from shop_admin import create_admin_app

# admin api base
application = create_admin_app()
