"""Module __init__: foundational pieces shared by the rest of sitelink."""
#
# WHAT'S IN THIS MODULE:
# - config.py: environment-driven settings and logging setup
# - exceptions.py: coded error taxonomy raised by the client
#
