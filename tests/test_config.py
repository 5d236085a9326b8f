#===============================================================================
#  BootWorkspace | tests/test_config.py
#===============================================================================

import json

import pytest

from bootworkspace.config import load_config, parse_config
from bootworkspace.constants import DEFAULT_CONFIG_JSON, DEFAULT_LAUNCH_DELAY_MS, DEFAULT_LAUNCH_TIMEOUT_MS
from bootworkspace.errors import ConfigError


def write(tmp_path, data, name="workspace.json", encoding="utf-8"):
    p = tmp_path / name
    p.write_text(data if isinstance(data, str) else json.dumps(data), encoding=encoding)
    return p


def test_loads_full_config(tmp_path):
    p = write(tmp_path, {
        "Desktops": [{"Index": 0, "Name": "Thing 1"}, {"index": 1, "name": "Thing 2"}],
        "APPS": [
            {"name": "Outlook", "path": "C:\\o.exe", "desktop": "Thing 1", "waitForWindow": True, "launchTimeoutMs": 20000},
            {"Name": "Shell", "Path": "shell:startup", "Args": "-x", "Desktop": 1},
        ],
        "launchDelayMs": 1500,
    })
    cfg = load_config(p)

    assert [(d.index, d.name) for d in cfg.desktops] == [(0, "Thing 1"), (1, "Thing 2")]
    outlook, shell = cfg.apps
    assert outlook.wait_for_window and outlook.effective_timeout_ms == 20000
    assert shell.desktop == "1"
    assert shell.args == "-x"
    assert cfg.launch_delay_ms == 1500


def test_defaults(tmp_path):
    cfg = load_config(write(tmp_path, {"apps": [{"name": "a", "path": "b"}]}))
    app = cfg.apps[0]
    assert cfg.desktops == ()
    assert cfg.launch_delay_ms == DEFAULT_LAUNCH_DELAY_MS
    assert app.desktop == "0"
    assert app.args is None
    assert app.wait_for_window is False
    assert app.effective_timeout_ms == DEFAULT_LAUNCH_TIMEOUT_MS


def test_non_positive_timeout_means_default():
    cfg = parse_config({"apps": [{"name": "a", "launchTimeoutMs": -5}]})
    assert cfg.apps[0].effective_timeout_ms == DEFAULT_LAUNCH_TIMEOUT_MS


def test_utf8_bom_is_accepted(tmp_path):
    p = write(tmp_path, json.dumps({"apps": [{"name": "Café"}]}), encoding="utf-8-sig")
    assert load_config(p).apps[0].name == "Café"


def test_default_config_template_is_valid():
    cfg = parse_config(json.loads(DEFAULT_CONFIG_JSON))
    assert cfg.apps[0].name == "Outlook"
    assert cfg.launch_delay_ms == 1500


@pytest.mark.parametrize("data", [
    {"apps": []},
    {"desktops": [{"index": 0, "name": "A"}]},
    {"apps": "notepad"},
    {"apps": [{"name": "a", "waitForWindow": "yes"}]},
    {"apps": [{"name": "a"}], "launchDelayMs": "fast"},
    {"apps": [{"name": "a"}], "desktops": [{"index": "one"}]},
    {"apps": ["notepad.exe"]},
    ["apps"],
])
def test_invalid_configs_raise(data):
    with pytest.raises(ConfigError):
        parse_config(data)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "workspace.json")


def test_broken_json(tmp_path):
    with pytest.raises(ConfigError):
        load_config(write(tmp_path, '{"apps": [ {"name": "a",} ]'))


def test_comments_and_trailing_commas_are_accepted(tmp_path):
    p = write(tmp_path, """{
  // my desktops
  "desktops": [
    { "index": 0, "name": "Thing 1" },
  ],
  /* apps started at logon */
  "apps": [
    { "name": "a", "path": "x", },
  ],
}
""")
    cfg = load_config(p)
    assert [(d.index, d.name) for d in cfg.desktops] == [(0, "Thing 1")]
    assert [(a.name, a.path) for a in cfg.apps] == [("a", "x")]


def test_non_finite_numbers_are_rejected(tmp_path):
    with pytest.raises(ConfigError):
        load_config(write(tmp_path, '{"apps": [{"name": "a"}], "launchDelayMs": Infinity}'))
