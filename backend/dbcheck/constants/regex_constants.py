import re

# $2a$ / $2b$ / $2y$ followed by a two-digit cost factor.
_BCRYPT = re.compile(r"^\$2[aby]\$\d{2}\$")

# Stored values shorter than this are treated as literal text, not a digest.
_PLAIN_MAX_LEN = 20
