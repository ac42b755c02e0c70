"""Configuration objects for the warehouse administration job.

These describe the objects the job asks Snowflake to create. They validate
their own values on construction so a bad setting fails before any
statement is sent.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


WAREHOUSE_SIZES = [
    'XSMALL', 'SMALL', 'MEDIUM', 'LARGE', 'XLARGE',
    'XXLARGE', 'XXXLARGE', 'X4LARGE', 'X5LARGE', 'X6LARGE',
]

# Aliases accepted by Snowflake for the same sizes
_SIZE_ALIASES = {
    'X-SMALL': 'XSMALL',
    'X-LARGE': 'XLARGE',
    '2X-LARGE': 'XXLARGE',
    'X2LARGE': 'XXLARGE',
    '3X-LARGE': 'XXXLARGE',
    'X3LARGE': 'XXXLARGE',
    '4X-LARGE': 'X4LARGE',
    '5X-LARGE': 'X5LARGE',
    '6X-LARGE': 'X6LARGE',
}

MAX_CLUSTER_COUNT_LIMIT = 10


class WarehouseType(Enum):
    STANDARD = 'STANDARD'
    SNOWPARK_OPTIMIZED = 'SNOWPARK-OPTIMIZED'


class ScalingPolicy(Enum):
    STANDARD = 'STANDARD'
    ECONOMY = 'ECONOMY'


class MonitorFrequency(Enum):
    MONTHLY = 'MONTHLY'
    DAILY = 'DAILY'
    WEEKLY = 'WEEKLY'
    YEARLY = 'YEARLY'
    NEVER = 'NEVER'


class TriggerAction(Enum):
    NOTIFY = 'NOTIFY'
    SUSPEND = 'SUSPEND'
    SUSPEND_IMMEDIATE = 'SUSPEND_IMMEDIATE'


def normalize_warehouse_size(size: str) -> str:
    """Return the canonical Snowflake size keyword, e.g. 'x-small' -> 'XSMALL'."""
    normalized = size.strip().upper()
    normalized = _SIZE_ALIASES.get(normalized, normalized)
    if normalized not in WAREHOUSE_SIZES:
        raise ValueError(f'unknown warehouse size: {size}')
    return normalized


@dataclass
class WarehouseConfig:
    name: str
    warehouse_size: str = 'XSMALL'
    warehouse_type: WarehouseType = WarehouseType.STANDARD
    min_cluster_count: int = 1
    max_cluster_count: int = 1
    scaling_policy: Optional[ScalingPolicy] = ScalingPolicy.STANDARD
    auto_suspend: Optional[int] = 60
    auto_resume: bool = True
    initially_suspended: bool = True
    comment: Optional[str] = None

    def __post_init__(self):
        self.warehouse_size = normalize_warehouse_size(self.warehouse_size)
        self.warehouse_type = WarehouseType(self.warehouse_type)
        if self.scaling_policy is not None:
            self.scaling_policy = ScalingPolicy(self.scaling_policy)
        if not 1 <= self.min_cluster_count <= self.max_cluster_count <= MAX_CLUSTER_COUNT_LIMIT:
            raise ValueError(
                f'cluster counts must satisfy 1 <= min <= max <= {MAX_CLUSTER_COUNT_LIMIT}, '
                f'got min={self.min_cluster_count} max={self.max_cluster_count}'
            )
        if self.auto_suspend is not None and self.auto_suspend < 0:
            raise ValueError(f'auto_suspend must be >= 0 seconds, got {self.auto_suspend}')

    @property
    def is_multi_cluster(self) -> bool:
        return self.max_cluster_count > 1

    def as_single_cluster(self) -> 'WarehouseConfig':
        """Same warehouse without multi-cluster settings (Standard edition accounts)."""
        return WarehouseConfig(
            name=self.name,
            warehouse_size=self.warehouse_size,
            warehouse_type=self.warehouse_type,
            min_cluster_count=1,
            max_cluster_count=1,
            scaling_policy=None,
            auto_suspend=self.auto_suspend,
            auto_resume=self.auto_resume,
            initially_suspended=self.initially_suspended,
            comment=self.comment,
        )


@dataclass
class MonitorTrigger:
    percent: int
    action: TriggerAction

    def __post_init__(self):
        self.action = TriggerAction(self.action)
        if self.percent <= 0:
            raise ValueError(f'trigger percent must be positive, got {self.percent}')


@dataclass
class ResourceMonitorConfig:
    name: str
    credit_quota: float
    frequency: MonitorFrequency = MonitorFrequency.MONTHLY
    start_timestamp: str = 'IMMEDIATELY'
    triggers: List[MonitorTrigger] = field(default_factory=list)

    def __post_init__(self):
        self.frequency = MonitorFrequency(self.frequency)
        if self.credit_quota <= 0:
            raise ValueError(f'credit_quota must be positive, got {self.credit_quota}')
        percents = [trigger.percent for trigger in self.triggers]
        if len(percents) != len(set(percents)):
            raise ValueError(f'trigger percents must be unique, got {percents}')
        for action in (TriggerAction.SUSPEND, TriggerAction.SUSPEND_IMMEDIATE):
            if sum(1 for trigger in self.triggers if trigger.action is action) > 1:
                raise ValueError(f'a resource monitor allows at most one {action.value} trigger')


@dataclass
class TimeoutSettings:
    """0 means no timeout for either value."""
    statement_timeout_in_seconds: int
    statement_queued_timeout_in_seconds: int

    def __post_init__(self):
        for key, value in self.as_parameters().items():
            if value < 0:
                raise ValueError(f'{key} must be >= 0, got {value}')

    def as_parameters(self) -> dict:
        return {
            'STATEMENT_TIMEOUT_IN_SECONDS': self.statement_timeout_in_seconds,
            'STATEMENT_QUEUED_TIMEOUT_IN_SECONDS': self.statement_queued_timeout_in_seconds,
        }


@dataclass
class SqlStatement:
    title: str
    sql: str
    note: Optional[str] = None
