from __future__ import annotations

# Ledger metadata / event body versions understood by the indexer
SUPPORTED_META_VERSION = 3
SUPPORTED_EVENT_BODY_VERSION = 0

# Governor event discriminators (topic[0] symbols)
VOTE_CAST_SYMBOL        = "vote_cast"
PROPOSAL_CREATED_SYMBOL = "proposal_created"
PROPOSAL_UPDATED_SYMBOL = "proposal_updated"

# Status every proposal starts in
INITIAL_PROPOSAL_STATUS = 0
