import pytest
from loguru import logger
from phasecycle.logging import (
    level_number,
    parse_level_range,
    parse_log_level_shorthand,
    register_custom_levels,
    setup_logger
)


def test_shorthand_per_sink():
    levels = parse_log_level_shorthand(logger, 'info,warning;stderr=error;file=debug')
    
    assert levels['stdout'] == (20, 30)
    assert levels['stderr'] == (40, None)
    assert levels['file'] == (10, None)


def test_shorthand_custom_and_numeric_levels():
    register_custom_levels(logger)
    levels = parse_log_level_shorthand(logger, 'timing;stderr=35')
    
    assert levels['stdout'] == (3, None)
    assert levels['stderr'] == (35, None)


def test_shorthand_empty():
    levels = parse_log_level_shorthand(logger, None)
    assert levels == {'stdout': (0, None), 'stderr': (0, None), 'file': (0, None)}


@pytest.mark.parametrize('notation, error', [
    ('warning,info', ValueError),
    ('nonsense', ValueError),
    ('info;debug', ValueError),
    ('console=info', KeyError),
    ('info,,warning', ValueError)
])
def test_shorthand_invalid(notation, error):
    with pytest.raises(error):
        parse_log_level_shorthand(logger, notation)


def test_level_helpers():
    register_custom_levels(logger)
    assert level_number(logger, 'verb') == 7
    assert level_number(logger, '12') == 12
    assert parse_level_range(logger, 'debug,error') == (10, 40)
    assert parse_level_range(logger, ' queue ') == (4, None)
    
    with pytest.raises(ValueError):
        level_number(logger, 'loud')
    with pytest.raises(ValueError):
        parse_level_range(logger, 'error,error')


def test_register_custom_levels_twice():
    register_custom_levels(logger)
    register_custom_levels(logger)
    assert logger.level('TIMING').no == 3
    assert hasattr(logger, 'queue')


def test_setup_logger_file_sink(tmp_path):
    log_file = tmp_path / 'logs' / 'phasecycle.log'
    try:
        l = setup_logger('critical;file=info', log_file=log_file)
        l.info('cycler file sink check')
        content = log_file.read_text()
    finally:
        logger.remove()
    
    assert 'cycler file sink check' in content
