# ============================================================
# Known Names Configuration
# Names offered in the dashboard dropdown and used as CLI defaults
# ============================================================

from name_codec import reverse_name

BASE_CHAIN_ID = 8453

KNOWN_NAMES = {
    "Manual input": {
        "name": "",
        "status": "manual",
        "source": "—",
    },
    "raffy.teamnick.eth": {
        "name": "raffy.teamnick.eth",
        "status": "verified",
        "source": "TeamNick subname on Base [Ethereum Mainnet]",
    },
    "raffy primary (Base)": {
        "name": reverse_name("0x51050ec063d393217b436747617ad1c2285aeeee", BASE_CHAIN_ID),
        "status": "verified",
        "source": "ENSIP-19 reverse record for chain 8453 [Ethereum Mainnet]",
    },
}
