"""Hatch tracker constants."""

from hatchbot.services.period import PERIOD_CHOICES

# Discord message content limit
MAX_MESSAGE_LENGTH = 2000

PERIOD_SUGGESTIONS = PERIOD_CHOICES
ALL_SUBJECTS = "all"

MSG_GUILD_ONLY = "This command can only be used in a server."
MSG_ADMIN_ONLY = "You must be an Administrator to run /setup"
MSG_INVALID_MULTIPLIER = "Loss multiplier must be greater than 0."
MSG_INTERNAL_ERROR = "❌ An internal error occurred."
