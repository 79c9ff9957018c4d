import re

from order_desk.common.structures import OrderDeskConfiguration, User

DIRECTORY_URL = "http://localhost"
MAILER_URL = "http://localhost"

JOHN = User(id=1, name="John")
JANE = User(id=2, name="Jane", email="jane.doe@example.org")

APPROVED_ORDER = {"userId": 1, "productId": 2, "mode": "approved"}
MISSING_USER_ORDER = {"userId": 7, "productId": 2, "mode": "draft"}

EMAIL_PATTERN = re.compile(r"^[\w\-.]+@([\w-]+\.)+[\w-]{2,4}$")


def make_configuration(**overrides) -> OrderDeskConfiguration:
    values = {
        "directory_url": DIRECTORY_URL,
        "mailer_url": MAILER_URL,
        "send_notifications": False,
        "http_timeout_seconds": 2.0,
    }
    values.update(overrides)
    return OrderDeskConfiguration(**values)
