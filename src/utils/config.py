# runtime settings, read once from the environment (and an optional .env file)
import os

from dotenv import load_dotenv

load_dotenv()

PRODUCT_API_URL = os.getenv("PRODUCT_API_URL", "https://backend3dx.onrender.com")
ORDER_API_URL = os.getenv(
    "ORDER_API_URL", "https://ecommercebackend-8gx8.onrender.com"
)
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))

# one of "random", "server" or "constant:<Status>"
ORDER_STATUS_STRATEGY = os.getenv("ORDER_STATUS_STRATEGY", "random")

SELLER_ID = os.getenv("SELLER_ID") or None

SUCCESS_MESSAGE_SECONDS = 2.0
