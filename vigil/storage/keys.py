"""Storage key names shared by every reader and writer of the store."""


class StorageKeys:
    """Named keys used in the durable store."""

    # Session timer
    SESSION_EXPIRY_TIME = "session_expiry_time"

    # Retry bookkeeping (owned by the feature performing retries)
    RETRY_ATTEMPTS = "payment_retry_attempts"
    FAILED_OPERATION = "failed_payment_intent"

    # Auth data written at login, consumed by the refresh collaborator
    ACCESS_TOKEN = "accessToken"
    REFRESH_TOKEN = "refreshToken"
    LOGGED_IN = "loggedIn"
    USER_EMAIL = "user_email"

    AUTH_KEYS = (ACCESS_TOKEN, REFRESH_TOKEN, LOGGED_IN, USER_EMAIL)
