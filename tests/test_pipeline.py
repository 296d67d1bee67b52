"""
End-to-end tests: packages on disk -> generated files.
"""

import json
from uuid import UUID

import pytest
from featweaver import config as config_module
from featweaver.cli import main
from featweaver.config import FeatWeaverConfig
from featweaver.content.models import pack_version
from featweaver.pipeline import load_modules, run_build
from featweaver.resolver import LoadOrderError

from conftest import ABILITY_LIST_ID, FEAT_ID, SHARED_ID, ability_selector, feat_node

MYMOD_ID = UUID("5f2c6f4e-1c3b-4f6e-9d0a-2b7e8c9d0a1b")


@pytest.fixture
def game(package_builder, tmp_path):
    """Shared with an ability list and a feat; MyMod overriding the feat."""
    shared = package_builder("SharedPkg")
    shared.meta("Shared", SHARED_ID)
    shared.feats("Shared", [feat_node("AbilityImprovements", selectors=ability_selector(1, 1),
                                      passives="E6_ASI")])
    shared.descriptions("Shared", FEAT_ID, "hName", "hDesc")
    shared.ability_list("Shared", ABILITY_LIST_ID, ["Strength", "Dexterity"])

    mymod = package_builder("MyModPkg")
    mymod.meta("MyMod", MYMOD_ID, version=pack_version(1, 0, 0, 1), dependencies=[("Shared", SHARED_ID)])
    mymod.feats("MyMod", [feat_node("AbilityImprovements", selectors=ability_selector(1, 1),
                                    passives="E6_ASI")])
    return tmp_path / "game"


@pytest.fixture
def config_file(game, tmp_path, monkeypatch):
    monkeypatch.setattr(config_module, "CONFIG_SEARCH_PATHS", [])
    for name in ("FEATWEAVER_GAME_PATHS", "FEATWEAVER_OUTPUT_PATH", "FEATWEAVER_MAX_LEAVES"):
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(
        f"game_install_paths:\n  - '{game.as_posix()}'\n"
        f"output_path: '{(tmp_path / 'generated').as_posix()}'\n",
        encoding="utf-8",
    )
    return path


class TestRunBuild:
    """Test the whole pipeline."""

    def test_load_order(self, config_file):
        modules = load_modules(FeatWeaverConfig(config_file))
        assert [m.name for m in modules] == ["Shared", "MyMod"]

    def test_build(self, config_file, tmp_path):
        summary = run_build(FeatWeaverConfig(config_file))
        out = tmp_path / "generated"

        assert summary.load_order == ["Shared", "MyMod"]
        assert summary.feat_count == 1
        # Per module: one container plus two leaves; the override draws its
        # candidates from Shared
        assert summary.spell_count == 6
        assert summary.boost_count == 4
        assert sorted(p.name for p in summary.written) == [
            "E6_Gen_MyMod_Shouts.txt",
            "E6_Gen_Shared_Boosts.txt",
            "E6_Gen_Shared_Shouts.txt",
            "E6_Gen_Wiring.json",
        ]

        wiring = json.loads((out / "E6_Gen_Wiring.json").read_text(encoding="utf-8"))
        # The most-derived module is woven first
        assert list(wiring["E6_Shout_EpicFeats"][0]) == ["MyMod", "Shared"]

        shouts = (out / "E6_Gen_Shared_Shouts.txt").read_text(encoding="utf-8")
        assert 'data "DisplayName" "hName;1"' in shouts

    def test_output_override(self, config_file, tmp_path):
        summary = run_build(FeatWeaverConfig(config_file), tmp_path / "elsewhere")
        assert all(p.parent == tmp_path / "elsewhere" for p in summary.written)

    def test_cycle(self, package_builder, config_file):
        other = package_builder("CyclePkg")
        a_id, b_id = UUID(int=11), UUID(int=12)
        other.meta("CycleA", a_id, dependencies=[("CycleB", b_id)])
        other.feats("CycleA", [feat_node("Alert", feat_id=UUID(int=21))])
        other.meta("CycleB", b_id, dependencies=[("CycleA", a_id)])
        other.feats("CycleB", [feat_node("Tough", feat_id=UUID(int=22))])

        with pytest.raises(LoadOrderError):
            run_build(FeatWeaverConfig(config_file))


class TestCli:
    """Test the command-line entry point."""

    def test_selector(self, capsys):
        code = main(["selector", "SelectAbilities(b9149c8e-52c8-46e5-9cb6-fc39301c05fe,2,1,FeatASI)"])
        assert code == 0
        assert "AbilitySelector" in capsys.readouterr().out

    def test_bad_selector(self, capsys):
        assert main(["selector", "nonsense"]) == 1

    def test_build(self, config_file, tmp_path, capsys):
        code = main(["-c", str(config_file), "build", "-o", str(tmp_path / "cli_out")])
        assert code == 0
        assert (tmp_path / "cli_out" / "E6_Gen_Wiring.json").exists()
        assert "Load order: Shared, MyMod" in capsys.readouterr().out

    def test_build_limit_error(self, config_file, tmp_path, capsys, monkeypatch):
        monkeypatch.setenv("FEATWEAVER_MAX_LEAVES", "1")
        code = main(["-c", str(config_file), "build"])
        assert code == 1
        assert "Build failed" in capsys.readouterr().err

    def test_modules(self, config_file, capsys):
        assert main(["-c", str(config_file), "modules"]) == 0
        out = capsys.readouterr().out
        assert "Shared v" in out
        assert "MyMod v1.0.0.1 (1 feats) <- Shared" in out

    def test_init_config(self, tmp_path, capsys):
        target = tmp_path / "cfg" / "config.yaml"
        assert main(["init-config", str(target)]) == 0
        assert target.exists()

    def test_no_command(self, capsys):
        assert main([]) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
