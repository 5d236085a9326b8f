#===============================================================================
#  BootWorkspace | tests/test_provisioner.py
#===============================================================================

import pytest

from bootworkspace.errors import ProvisioningError
from bootworkspace.models import AppSpec
from bootworkspace.provisioner import ensure_desktops, required_desktop_count

from conftest import FakeDesktopProvider, make_config


def apps(*desktops):
    return [AppSpec(name=f"a{i}", path="x", desktop=d) for i, d in enumerate(desktops)]


@pytest.mark.parametrize("desks, targets, expected", [
    ([], ["0"], 1),
    ([(2, "C")], ["0"], 3),
    ([], ["4"], 5),
    ([(1, "B")], ["desktop 9"], 2),     # only plain integers count
    ([], ["-3", "Mail"], 1),
    ([(0, "A"), (6, "G")], ["2"], 7),
    ([], ["3000000000"], 1),
])
def test_required_desktop_count(desks, targets, expected):
    assert required_desktop_count(make_config(apps(*targets), desks)) == expected


def test_creates_missing_desktops_one_at_a_time():
    provider = FakeDesktopProvider(count=1)
    live = ensure_desktops(make_config(apps("3")), provider)
    assert provider.created == 3
    assert len(live) == 4


def test_is_idempotent():
    provider = FakeDesktopProvider(count=1)
    cfg = make_config(apps("0", "2"), [(0, "Thing 1"), (1, "Thing 2")])
    ensure_desktops(cfg, provider)
    created, renames = provider.created, len(provider.renames)

    ensure_desktops(cfg, provider)
    assert provider.created == created
    assert len(provider.renames) == renames
    assert len(provider.list_desktops()) >= required_desktop_count(cfg)


def test_names_only_differing_nonempty_in_range():
    provider = FakeDesktopProvider(names=["Mail", "old"])
    cfg = make_config(apps("0"), [(0, "Mail"), (1, "Code"), (2, "  ")])
    live = ensure_desktops(cfg, provider)
    assert provider.renames == [(1, "Code")]
    assert [d.name for d in live] == ["Mail", "Code", ""]


def test_naming_failures_are_swallowed(run_log):
    provider = FakeDesktopProvider(count=2, can_rename=False)
    live = ensure_desktops(make_config(apps("0"), [(0, "A"), (1, "B")]), provider, run_log)
    assert len(live) == 2
    assert "Could not name desktop 0" in run_log.read_text()


def test_create_that_adds_nothing_is_fatal():
    class Stuck(FakeDesktopProvider):
        def create_desktop(self):
            self.created += 1

    with pytest.raises(ProvisioningError):
        ensure_desktops(make_config(apps("2")), Stuck(count=1))
