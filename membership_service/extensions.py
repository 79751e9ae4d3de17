from flask_cors import CORS

cors = CORS()

# Keys under app.extensions
DISPATCHER = "membership_dispatcher"
RATE_LIMITER = "membership_rate_limiter"
SETTINGS = "membership_settings"
