import pytest

from models import (
    Color,
    InstallationConfig,
    PhysicalRange,
    PixelLocation,
    Sequence,
    Step,
    UniverseDefinition,
)
from animations import SolidColorAnimation
from utils import hex_to_rgb, lerp_channel


class TestColor:

    def test_default_is_blank(self):
        assert Color() == Color(0, 0, 0, 0)
        assert Color() != Color.black()

    def test_hex_round_trip(self):
        amber = Color.from_hex(0xEE8800)
        assert amber.to_rgb() == (0xEE, 0x88, 0x00)
        assert amber.a == 255
        assert amber.to_hex() == 0xEE8800
        assert str(amber) == "Color(#EE8800, a=255)"

    def test_blend_is_opaque_and_clamped(self):
        start = Color(10, 20, 30, 0)
        end = Color.from_rgb(110, 220, 30)

        assert start.blend(end, 0.5) == Color(60, 120, 30, 255)
        assert start.blend(end, -1.0) == start.opaque()
        assert start.blend(end, 2.0) == end

    def test_colors_are_immutable(self):
        with pytest.raises(AttributeError):
            Color.red().r = 0


class TestColorUtils:

    def test_hex_to_rgb(self):
        assert hex_to_rgb(0x123456) == (0x12, 0x34, 0x56)

    def test_lerp_channel_rounds(self):
        assert lerp_channel(0, 255, 0.5) == 128
        assert lerp_channel(255, 0, 0.25) == 191


class TestPhysicalRange:

    def test_locations_cover_range(self):
        r = PhysicalRange(board=1, strand=2, start_pixel=61, size=3)

        assert r.end_pixel == 63
        assert list(r.locations()) == [
            PixelLocation(1, 2, 61),
            PixelLocation(1, 2, 62),
            PixelLocation(1, 2, 63),
        ]

    def test_zero_size_has_no_locations(self):
        assert list(PhysicalRange(0, 0, 5, 0).locations()) == []

    def test_negative_fields_rejected(self):
        with pytest.raises(ValueError):
            PhysicalRange(0, 0, -1, 2)

    def test_from_dict(self):
        assert PhysicalRange.from_dict({"board": "1", "strand": 0, "start": 4, "size": 2}) == PhysicalRange(1, 0, 4, 2)
        assert PhysicalRange.from_dict({"board": 0, "strand": 0, "size": 2}).start_pixel == 0


class TestInstallationConfig:

    def test_universe_sizes_and_index(self):
        config = InstallationConfig(
            boards=[[10, 8], [5]],
            universes=[
                UniverseDefinition("a", [PhysicalRange(0, 0, 0, 4), PhysicalRange(1, 0, 0, 5)]),
                UniverseDefinition("b", []),
            ],
        )

        assert config.universe_sizes() == [9, 0]
        assert config.universe_index("b") == 1
        assert config.strand_count == 3
        with pytest.raises(KeyError):
            config.universe_index("c")

    def test_universe_requires_name(self):
        with pytest.raises(ValueError):
            UniverseDefinition("", [])


class TestSequence:

    def test_add_chains(self):
        effect = SolidColorAnimation(Color.red())
        sequence = Sequence().add(Step(0, effect)).add(Step(1, effect, delay=0.5, on_completion_of=3))

        assert len(sequence) == 2
        steps = list(sequence)
        assert not steps[0].is_gated and not steps[0].has_delay
        assert steps[1].is_gated and steps[1].has_delay

    def test_negative_delay_means_no_delay(self):
        assert not Step(0, SolidColorAnimation(Color.red()), delay=-2.0).has_delay
