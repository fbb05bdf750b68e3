"""SQL statements for deployment frequency series.

Each ``*_DEPLOYMENT_SQL`` statement is an unfinished ``WITH`` clause that
ends with a ``_bucket_counts`` CTE (``data_key``, ``bucket_start``,
``deployment_count``). Appending ``COUNT_SQL`` or ``AVERAGE_SQL`` selects
the final ``data_key``/``data_value`` series, most recent bucket first.

Bind parameters: ``:project`` (empty string for all projects),
``:from_timestamp`` and ``:to_timestamp`` (unix seconds, 0 for unbounded).
Without a lower bound the series covers the last six months.
"""

# Successful production deployments, one row per deployment
_PRODUCTION_DEPLOYMENTS_CTE = """
_production_deployments AS (
    SELECT
        cdc.cicd_deployment_id AS deployment_id,
        MAX(cdc.finished_date) AS deployment_finished_date
    FROM cicd_deployment_commits cdc
    JOIN project_mapping pm
        ON cdc.cicd_scope_id = pm.row_id
        AND pm.`table` = 'cicd_scopes'
    WHERE (:project = '' OR pm.project_name = :project)
        AND cdc.result = 'SUCCESS'
        AND cdc.environment = 'PRODUCTION'
    GROUP BY cdc.cicd_deployment_id
)"""

_RANGE_CTE = """
_range AS (
    SELECT
        DATE(IF(:from_timestamp = 0, NOW() - INTERVAL 6 MONTH, FROM_UNIXTIME(:from_timestamp))) AS range_start,
        DATE(IF(:to_timestamp = 0, NOW(), FROM_UNIXTIME(:to_timestamp))) AS range_end
)"""


def _deployment_sql(first_bucket: str, interval: str, key: str) -> str:
    """
    Build the bucketed deployment count clause for one granularity.

    Args:
        first_bucket: Expression over ``range_start`` giving the first bucket start
        interval: MySQL interval unit of a bucket (WEEK, MONTH, QUARTER)
        key: Expression over ``bucket_start`` giving the bucket label
    """
    return f"""
WITH RECURSIVE{_RANGE_CTE},
_buckets (bucket_start) AS (
    SELECT {first_bucket} FROM _range
    UNION ALL
    SELECT bucket_start + INTERVAL 1 {interval}
    FROM _buckets, _range
    WHERE bucket_start + INTERVAL 1 {interval} <= _range.range_end
),{_PRODUCTION_DEPLOYMENTS_CTE},
_bucket_counts AS (
    SELECT
        {key} AS data_key,
        b.bucket_start,
        COUNT(d.deployment_id) AS deployment_count
    FROM _buckets b
    LEFT JOIN _production_deployments d
        ON d.deployment_finished_date >= b.bucket_start
        AND d.deployment_finished_date < b.bucket_start + INTERVAL 1 {interval}
    GROUP BY b.bucket_start
)
"""


# ISO year-week keys, e.g. "202338"
WEEKLY_DEPLOYMENT_SQL = _deployment_sql(
    first_bucket="DATE_SUB(range_start, INTERVAL WEEKDAY(range_start) DAY)",
    interval="WEEK",
    key="CAST(YEARWEEK(b.bucket_start, 3) AS CHAR)",
)

# Month keys, e.g. "23/04"
MONTHLY_DEPLOYMENT_SQL = _deployment_sql(
    first_bucket="DATE(DATE_FORMAT(range_start, '%Y-%m-01'))",
    interval="MONTH",
    key="DATE_FORMAT(b.bucket_start, '%y/%m')",
)

# Quarter start date keys, e.g. "2024-01-01"
QUARTERLY_DEPLOYMENT_SQL = _deployment_sql(
    first_bucket="MAKEDATE(YEAR(range_start), 1) + INTERVAL (QUARTER(range_start) - 1) QUARTER",
    interval="QUARTER",
    key="DATE_FORMAT(b.bucket_start, '%Y-%m-%d')",
)

COUNT_SQL = """
SELECT
    data_key,
    deployment_count AS data_value
FROM _bucket_counts
ORDER BY bucket_start DESC
"""

# Trailing average over the current and three preceding buckets
AVERAGE_SQL = """
SELECT
    data_key,
    AVG(deployment_count) OVER (
        ORDER BY bucket_start
        ROWS BETWEEN 3 PRECEDING AND CURRENT ROW
    ) AS data_value
FROM _bucket_counts
ORDER BY bucket_start DESC
"""
