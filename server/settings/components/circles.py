"""Circle membership, sharing and marketplace settings."""

from decimal import Decimal

from server.settings.components import config

# Invitation codes for private circles
CIRCLES_INVITATION_CODE_LENGTH = config(
    'CIRCLES_INVITATION_CODE_LENGTH',
    cast=int,
    default=8,
)
CIRCLES_INVITATION_CODE_ATTEMPTS = config(
    'CIRCLES_INVITATION_CODE_ATTEMPTS',
    cast=int,
    default=5,
)

# Share link tokens
CIRCLES_SHARE_TOKEN_LENGTH = config(
    'CIRCLES_SHARE_TOKEN_LENGTH',
    cast=int,
    default=32,
)

# Marketplace: platform cut of every completed order (0.1%)
CIRCLES_PLATFORM_FEE_RATE = config(
    'CIRCLES_PLATFORM_FEE_RATE',
    cast=Decimal,
    default='0.001',
)

# Login identity that is promoted to admin on first sign-in
OWNER_OPEN_ID = config('OWNER_OPEN_ID', default='')
