from .user import get_token, get_current_user
from .payments import get_payment_gateway
