# env vars + constants
import os

NODE_ID = os.getenv("NODE_ID", "nodeX")
PORT = int(os.getenv("PORT", "8000"))

# identity recorded as owner when the node constructs its ledger
LEDGER_OWNER = os.getenv("LEDGER_OWNER", "owner")
CALLER_HEADER = os.getenv("CALLER_HEADER", "X-Caller")

EVENT_SUBSCRIBERS = [
    s.strip().rstrip("/")
    for s in os.getenv("EVENT_SUBSCRIBERS", "").split(",")
    if s.strip()
]
EVENT_FORWARD_INTERVAL = float(os.getenv("EVENT_FORWARD_INTERVAL", "1.0"))
EVENT_FORWARD_TIMEOUT = float(os.getenv("EVENT_FORWARD_TIMEOUT", "1.5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
