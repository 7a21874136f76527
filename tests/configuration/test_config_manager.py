import textwrap
from pathlib import Path

import pytest

from engine.sequence_runner import SequenceRunner
from managers import ConfigManager
from models.errors import ConfigLoadError, PixelOutOfRangeError
from models.universe import PhysicalRange
from universe_layer.universe_mapping import UniverseMapping


MONOLITHIC = """
boards:
  - [10, 8, 19]
  - [1, 23, 64, 17]
universes:
  - name: one
    ranges:
      - {board: 0, strand: 2, start: 3, size: 4}
      - {board: 1, strand: 2, start: 61, size: 3}
  - name: three
    ranges:
      - {board: 0, strand: 1, start_pixel: 3, size: 1}
"""


def write(path: Path, text: str) -> Path:
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


@pytest.fixture
def monolithic(tmp_path):
    return write(tmp_path / "installation.yaml", MONOLITHIC)


class TestLoad:

    def test_monolithic_file(self, monolithic):
        installation = ConfigManager(monolithic).load()

        assert installation.boards == [[10, 8, 19], [1, 23, 64, 17]]
        assert [u.name for u in installation.universes] == ["one", "three"]
        assert installation.universes[0].ranges[1] == PhysicalRange(1, 2, 61, 3)
        assert installation.universe_sizes() == [7, 1]
        assert installation.strand_count == 7

    def test_start_pixel_key_accepted(self, monolithic):
        installation = ConfigManager(monolithic).load()
        assert installation.universes[1].ranges == [PhysicalRange(0, 1, 3, 1)]

    def test_include_files_are_merged(self, tmp_path):
        write(tmp_path / "boards.yaml", """
            boards:
              - [5, 5]
        """)
        write(tmp_path / "universes.yaml", """
            universes:
              - name: only
                ranges:
                  - {board: 0, strand: 1, start: 0, size: 5}
        """)
        main = write(tmp_path / "installation.yaml", """
            include:
              - boards.yaml
              - universes.yaml
        """)

        installation = ConfigManager(main).load()

        assert installation.boards == [[5, 5]]
        assert installation.universe_index("only") == 0

    def test_bundled_config_loads(self):
        path = Path(__file__).parents[2] / "src" / "config" / "installation.yaml"
        installation = ConfigManager(path).load()

        assert len(installation.boards) == 2
        assert installation.universe_sizes() == [30, 30, 60, 60]

    def test_empty_file_gives_empty_installation(self, tmp_path):
        installation = ConfigManager(write(tmp_path / "empty.yaml", "")).load()

        assert installation.boards == []
        assert installation.universes == []


class TestLoadErrors:

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigLoadError) as exc_info:
            ConfigManager(tmp_path / "nope.yaml").load()
        assert "file not found" in exc_info.value.message

    def test_malformed_yaml(self, tmp_path):
        path = write(tmp_path / "broken.yaml", "boards: [1, 2\n")
        with pytest.raises(ConfigLoadError):
            ConfigManager(path).load()

    def test_top_level_list_rejected(self, tmp_path):
        path = write(tmp_path / "list.yaml", "- 1\n- 2\n")
        with pytest.raises(ConfigLoadError):
            ConfigManager(path).load()

    def test_missing_include_file(self, tmp_path):
        path = write(tmp_path / "installation.yaml", "include: [absent.yaml]\n")
        with pytest.raises(ConfigLoadError):
            ConfigManager(path).load()

    @pytest.mark.parametrize("body", [
        "boards: 7\n",
        "boards:\n  - [10, x]\n",
        "universes:\n  - ranges: []\n",
        "universes:\n  - name: a\n    ranges:\n      - {board: 0, strand: 0}\n",
        "universes:\n  - name: a\n    ranges:\n      - {board: 0, strand: -1, start: 0, size: 1}\n",
    ])
    def test_invalid_content(self, tmp_path, body):
        path = write(tmp_path / "bad.yaml", body)
        with pytest.raises(ConfigLoadError):
            ConfigManager(path).load()

    def test_falls_back_to_defaults(self, tmp_path, monolithic):
        manager = ConfigManager(tmp_path / "missing.yaml", defaults_path=monolithic)

        installation = manager.load()

        assert [u.name for u in installation.universes] == ["one", "three"]

    def test_defaults_failure_propagates(self, tmp_path):
        manager = ConfigManager(tmp_path / "missing.yaml", defaults_path=tmp_path / "also_missing.yaml")
        with pytest.raises(ConfigLoadError):
            manager.load()


class TestBuilders:

    def test_build_mapping_and_runner_agree(self, monolithic):
        manager = ConfigManager(monolithic)

        mapping = manager.build_mapping()
        runner = manager.build_runner()

        assert isinstance(mapping, UniverseMapping)
        assert isinstance(runner, SequenceRunner)
        assert mapping.universe_names() == ["one", "three"]
        assert runner.universe_count == mapping.universe_count
        assert [runner.universe_size(i) for i in range(runner.universe_count)] == mapping.universe_sizes()

    def test_out_of_range_universe_fails_mapping(self, tmp_path):
        path = write(tmp_path / "installation.yaml", """
            boards:
              - [4]
            universes:
              - name: long
                ranges:
                  - {board: 0, strand: 0, start: 2, size: 3}
        """)
        with pytest.raises(PixelOutOfRangeError):
            ConfigManager(path).build_mapping()
