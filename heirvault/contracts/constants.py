"""Values shared by the on-chain application and the off-chain vault."""

# 30 days of owner silence before the heir may claim
TIMELOCK_SECONDS = 30 * 24 * 60 * 60

STATUS_ALIVE = "ALIVE"
STATUS_CLAIMABLE = "CLAIMABLE"
