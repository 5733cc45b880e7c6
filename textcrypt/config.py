"""
Defaults shared by the dispatch layer, the password generator and the CLI.
"""

DEFAULT_SIGN_FORMAT   = "blake3"
DEFAULT_BASE64_FORMAT = "standard"

# Generated key file names, written into the --output directory.
BLAKE3_KEY_FILE  = "blake3.txt"
ED25519_SK_FILE  = "ed25519.sk"
ED25519_PK_FILE  = "ed25519.pk"

# Password alphabet. Look-alike characters (I, O, l, 0) are left out.
UPPER  = b"ABCDEFGHJKLMNPQRSTUVWXYZ"
LOWER  = b"abcdefghijkmnopqrstuvwxyz"
NUMBER = b"123456789"
SYMBOL = b"!@#$%^&*_"

DEFAULT_PASSWORD_LENGTH = 16
MAX_PASSWORD_LENGTH     = 255

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
