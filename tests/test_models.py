import pytest

from prefect_jobs.warehouse_admin.models import (
    WarehouseConfig, WarehouseType, ScalingPolicy, ResourceMonitorConfig, MonitorTrigger,
    MonitorFrequency, TriggerAction, TimeoutSettings, normalize_warehouse_size,
)


@pytest.mark.parametrize('size, expected', [
    ('xsmall', 'XSMALL'),
    ('X-Small', 'XSMALL'),
    (' large ', 'LARGE'),
    ('2X-Large', 'XXLARGE'),
    ('X4LARGE', 'X4LARGE'),
])
def test_normalize_warehouse_size(size, expected):
    assert normalize_warehouse_size(size) == expected


def test_warehouse_config_coerces_enums():
    config = WarehouseConfig(name='wh', warehouse_type='SNOWPARK-OPTIMIZED', scaling_policy='ECONOMY',
                             min_cluster_count=1, max_cluster_count=3)
    assert config.warehouse_type is WarehouseType.SNOWPARK_OPTIMIZED
    assert config.scaling_policy is ScalingPolicy.ECONOMY
    assert config.is_multi_cluster


@pytest.mark.parametrize('min_count, max_count', [(0, 1), (3, 2), (1, 11)])
def test_warehouse_config_rejects_bad_cluster_counts(min_count, max_count):
    with pytest.raises(ValueError):
        WarehouseConfig(name='wh', min_cluster_count=min_count, max_cluster_count=max_count)


def test_warehouse_config_rejects_negative_auto_suspend():
    with pytest.raises(ValueError):
        WarehouseConfig(name='wh', auto_suspend=-1)


def test_as_single_cluster_keeps_other_settings():
    config = WarehouseConfig(name='wh', warehouse_size='MEDIUM', max_cluster_count=4, auto_suspend=300,
                             comment='multi')
    single = config.as_single_cluster()
    assert not single.is_multi_cluster
    assert single.scaling_policy is None
    assert (single.name, single.warehouse_size, single.auto_suspend, single.comment) == ('wh', 'MEDIUM', 300, 'multi')
    assert config.max_cluster_count == 4


def test_resource_monitor_config():
    config = ResourceMonitorConfig(name='rm', credit_quota=100, frequency='WEEKLY',
                                   triggers=[MonitorTrigger(90, 'NOTIFY')])
    assert config.frequency is MonitorFrequency.WEEKLY
    assert config.triggers[0].action is TriggerAction.NOTIFY


def test_resource_monitor_rejects_duplicate_trigger_percents():
    with pytest.raises(ValueError):
        ResourceMonitorConfig(name='rm', credit_quota=100, triggers=[
            MonitorTrigger(100, 'NOTIFY'), MonitorTrigger(100, 'SUSPEND'),
        ])


@pytest.mark.parametrize('quota', [0, -5])
def test_resource_monitor_rejects_non_positive_quota(quota):
    with pytest.raises(ValueError):
        ResourceMonitorConfig(name='rm', credit_quota=quota)


def test_trigger_rejects_unknown_action_and_bad_percent():
    with pytest.raises(ValueError):
        MonitorTrigger(50, 'EMAIL')
    with pytest.raises(ValueError):
        MonitorTrigger(0, 'NOTIFY')


def test_timeout_settings():
    timeouts = TimeoutSettings(statement_timeout_in_seconds=0, statement_queued_timeout_in_seconds=60)
    assert timeouts.as_parameters() == {
        'STATEMENT_TIMEOUT_IN_SECONDS': 0,
        'STATEMENT_QUEUED_TIMEOUT_IN_SECONDS': 60,
    }
    with pytest.raises(ValueError):
        TimeoutSettings(statement_timeout_in_seconds=-1, statement_queued_timeout_in_seconds=0)


@pytest.mark.parametrize('action', ['SUSPEND', 'SUSPEND_IMMEDIATE'])
def test_resource_monitor_rejects_repeated_suspend_triggers(action):
    with pytest.raises(ValueError, match=action):
        ResourceMonitorConfig(name='rm', credit_quota=100, triggers=[
            MonitorTrigger(90, action), MonitorTrigger(120, action),
        ])
