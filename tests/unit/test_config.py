import logging

import pytest

from lazyload_lib import Registrar
from lazyload_lib.config import Config, load_config
from lazyload_lib.logging_config import configure_logging
from lazyload_lib.main import bootstrap, create_registrar


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_missing_config_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config() == Config()
    assert load_config(tmp_path / 'absent.yml') == Config(allow_reassignment=True, log_level=None)


def test_load_config_values(tmp_path):
    cfg = tmp_path / 'lazyload.yml'
    cfg.write_text('log_level: debug\nregistry:\n  allow_reassignment: false\n', encoding='utf-8')

    assert load_config(cfg) == Config(allow_reassignment=False, log_level='debug')


def test_invalid_yaml_falls_back_to_defaults(tmp_path):
    cfg = tmp_path / 'broken.yml'
    cfg.write_text('registry: [unclosed\n', encoding='utf-8')
    assert load_config(cfg) == Config()


def test_non_mapping_config_falls_back_to_defaults(tmp_path):
    cfg = tmp_path / 'list.yml'
    cfg.write_text('- a\n- b\n', encoding='utf-8')
    assert load_config(cfg) == Config()


def test_create_registrar_honours_reassignment_flag():
    registrar = create_registrar(Config(allow_reassignment=False))
    assert isinstance(registrar, Registrar)
    assert registrar.registry.allow_reassignment is False
    assert create_registrar().registry.allow_reassignment is True


def test_create_registrar_returns_fresh_registries():
    assert create_registrar().registry is not create_registrar().registry


def test_configure_logging_reads_level(tmp_path, restore_root_logging):
    cfg = tmp_path / 'lazyload.yml'
    cfg.write_text('log_level: DEBUG\n', encoding='utf-8')

    configure_logging(cfg)
    assert logging.getLogger().level == logging.DEBUG


def test_configure_logging_ignores_unknown_level(tmp_path, restore_root_logging):
    cfg = tmp_path / 'lazyload.yml'
    cfg.write_text('log_level: LOUD\n', encoding='utf-8')

    configure_logging(cfg)
    assert logging.getLogger().level == logging.WARNING


def test_bootstrap(tmp_path, restore_root_logging):
    cfg = tmp_path / 'lazyload.yml'
    cfg.write_text('log_level: INFO\nregistry:\n  allow_reassignment: false\n', encoding='utf-8')

    registrar = bootstrap(cfg)
    assert registrar.registry.allow_reassignment is False
    assert logging.getLogger().level == logging.INFO


def test_bootstrap_reads_config_once(tmp_path, monkeypatch, restore_root_logging):
    import lazyload_lib.logging_config
    import lazyload_lib.main

    cfg = tmp_path / 'lazyload.yml'
    cfg.write_text('log_level: DEBUG\n', encoding='utf-8')
    loads = []

    def counting_load(path=None):
        loads.append(path)
        return load_config(path)

    monkeypatch.setattr(lazyload_lib.main, 'load_config', counting_load)
    monkeypatch.setattr(lazyload_lib.logging_config, 'load_config', counting_load)

    bootstrap(cfg)
    assert loads == [cfg]
    assert logging.getLogger().level == logging.DEBUG
