HTTP_STATUS_CODES = {
    "OK": 200,
	"CREATED": 201,
	"NO_CONTENT": 204,
	"BAD_REQUEST": 400,
	"UNAUTHORIZED": 401,
	"FORBIDDEN": 403,
	"NOT_FOUND": 404,
	"CONFLICT": 409,
	"VALIDATION_ERROR": 422,
	"TOO_MANY_REQUESTS": 429,
	"INTERNAL_SERVER_ERROR": 500,
	"SERVICE_UNAVAILABLE": 503,
}

ERROR_MESSAGES = {
	"UNAUTHORIZED": "Unauthorized",
	"INTERNAL_ERROR": "Internal error",
	"STORE_ID_REQUIRED": "Store id is required",
	"PRODUCT_ID_REQUIRED": "Product id is required",
	"INVALID_CATEGORY_DATA": "Invalid category data",
	"INVALID_BILLBOARD_DATA": "Invalid billboard data",
	"INVALID_PRODUCT_DATA": "Invalid Product data",
	"INVALID_STORE_DATA": "Invalid store data",
	"INVALID_SIZE_DATA": "Invalid size data",
	"INVALID_COLOR_DATA": "Invalid color data",
	"INVALID_ORDER_DATA": "Invalid order data",
}

AUTHENTICATION_MESSAGES = {
	'AUTHENTICATION_REQUIRED': "Authentication Required",
	"TOKEN_EXPIRED": "Token expired",
	"INVALID_TOKEN": "Invalid token",
}

# Error code returned when a product variation still used by an undelivered
# order would be removed from its product.
VARIATION_IN_USE_CODE = "P2014"
VARIATION_IN_USE_MESSAGE = "Product Variation cannot be deleted because it is used in an order"

# Form feedback shown by the admin client
FORM_MESSAGES = {
	"INTERNAL_SERVER_ERROR": "Internal Server Error",
	"GENERIC_ERROR": "Something went wrong. Please try again.",
}

ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}
