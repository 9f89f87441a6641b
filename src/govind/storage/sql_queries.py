"""
sql_queries.py
--------------

SQL used by the DuckDB state store, the read-side queries and the Parquet
export. Kept as constants so the Python modules only bind parameters.
"""

# =====================================================================
# SCHEMA
# =====================================================================

CREATE_SCHEMA = """
CREATE SEQUENCE IF NOT EXISTS votes_id_seq;

CREATE TABLE IF NOT EXISTS votes (
    id        BIGINT   NOT NULL DEFAULT nextval('votes_id_seq'),
    contract  VARCHAR  NOT NULL,
    prop_num  UINTEGER NOT NULL,
    voter     VARCHAR  NOT NULL,
    support   UINTEGER NOT NULL,
    amount    HUGEINT  NOT NULL,
    ledger    UINTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS proposals (
    contract    VARCHAR  NOT NULL,
    prop_num    UINTEGER NOT NULL,
    title       VARCHAR  NOT NULL,
    description VARCHAR  NOT NULL,
    action      VARCHAR  NOT NULL,  -- tagged ScVal JSON
    creator     VARCHAR  NOT NULL,
    status      UINTEGER NOT NULL,
    ledger      UINTEGER NOT NULL,
    PRIMARY KEY (contract, prop_num)
);
"""


# =====================================================================
# WRITES
# =====================================================================

INSERT_VOTE = """
INSERT INTO votes (contract, prop_num, voter, support, amount, ledger)
VALUES (?, ?, ?, ?, CAST(? AS HUGEINT), ?);
"""

INSERT_PROPOSAL = """
INSERT INTO proposals (contract, prop_num, title, description, action, creator, status, ledger)
VALUES (?, ?, ?, ?, ?, ?, ?, ?);
"""

UPDATE_PROPOSAL_STATUS = """
UPDATE proposals
SET status = ?
WHERE contract = ? AND prop_num = ?
RETURNING prop_num;
"""


# =====================================================================
# READS
# =====================================================================

# amount is rendered as text: i128 does not fit pandas / Arrow integer types
SELECT_VOTES = """
SELECT
  id,
  contract,
  prop_num,
  voter,
  support,
  CAST(amount AS VARCHAR) AS amount,
  ledger
FROM votes
{where}
ORDER BY id;
"""

SELECT_PROPOSALS = """
SELECT
  contract,
  prop_num,
  title,
  description,
  action,
  creator,
  status,
  ledger
FROM proposals
{where}
ORDER BY ledger, contract, prop_num;
"""
