# Database
ERROR_DB_CONNECTION_FAILED = "error.database.connection-failed"
ERROR_DB_TRANSACTION_FAILED = "error.database.transaction-failed"

# User
ERROR_USER_NOT_FOUND = "error.user.not-found"
ERROR_USER_ALREADY_EXIST = "error.user.already-exist"

# Swipe
ERROR_SWIPE_ALREADY_EXISTS = "error.swipe.already-exists"
ERROR_SWIPE_SELF = "error.swipe.self"

# Match
ERROR_MATCH_NOT_FOUND = "error.match.not-found"

# Message
ERROR_MESSAGE_NOT_AUTHORIZED = "error.message.not-authorized"
ERROR_MESSAGE_EMPTY = "error.message.empty"

# Daily picks
ERROR_DAILY_PICKS_NOT_FOUND = "error.daily-picks.not-found"
ERROR_DAILY_PICKS_PICK_NOT_FOUND = "error.daily-picks.pick-not-found"
ERROR_DAILY_PICKS_NO_EMBEDDING = "error.daily-picks.no-embedding"

# External Services
ERROR_EXT_AI_PROVIDER_FAILED = "error.external.ai-provider-failed"
ERROR_EXT_VECTOR_SEARCH_FAILED = "error.external.vector-search-failed"

# Validation
ERROR_VAL_INVALID_INPUT = "error.validation.invalid-input"
ERROR_VAL_OUT_OF_RANGE = "error.validation.out-of-range"

# Admin
ERROR_ADMIN_NO_DEMO_USERS = "error.admin.no-demo-users"

# Internal
ERROR_INTERNAL_UNEXPECTED = "error.internal.unexpected"
