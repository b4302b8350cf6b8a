"""Constants for taskhub.

This module centralizes the limits and response codes used throughout the application.
"""

# Field limits
MAX_FIELD_LENGTH = 255

# Response codes
INVALID_DATA = "invalid_data"
EXISTED_EMAIL = "existed_email"
EXISTED_EMAIL_MESSAGE = "The email address already exists."
