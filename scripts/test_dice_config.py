#!/usr/bin/env python3
"""
Tests for DiceConfig: defaults, format validation, lazy derivation and
serialization.
"""

import sys
import pathlib
import dataclasses
import tempfile

import pytest

# Add src to path
project_root = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

import music_dice
from music_dice.dice import DiceConfig, DurationPartitioner
from music_dice.errors import ConfigurationFormatError, UnknownScaleError
from music_dice.theory import ALL_DURATIONS, DEFAULT_DURATION_POOL, FLAT_NAMES, total_beats
from music_dice.utils import default_config_path, load_config


def test_defaults():
    config = DiceConfig()

    assert config.note_pool == tuple(FLAT_NAMES)
    assert config.interval_pool == (1,) * 12
    assert config.durations == DEFAULT_DURATION_POOL
    assert config.octave_range == (2, 3, 4, 5, 6)
    assert config.chord_voice_counts == (3, 4)
    assert config.phrase_length_constraints == (3, 4, 5)
    assert config.chord_triad_weights == (2, 2, 1, 1, 1)
    assert len(config.mode_names) == 7
    assert config.beats_per_phrase == 4

    print("  [OK] defaults")


def test_scale_derivation():
    major = DiceConfig(scale_name="major")
    assert major.note_pool == ("C", "D", "E", "F", "G", "A", "B")
    assert major.interval_pool == (2, 2, 1, 2, 2, 2, 1)

    a_minor = DiceConfig(tonic="A", scale_name="minor")
    assert a_minor.note_pool == ("A", "B", "C", "D", "E", "F", "G")
    assert a_minor.interval_pool == (2, 1, 2, 2, 1, 2, 2)

    c_sharp = DiceConfig(tonic="C#", scale_name="major")
    assert c_sharp.note_pool == ("C#", "D#", "E#", "F#", "G#", "A#", "B#")

    sharps = DiceConfig(use_flats=False)
    assert sharps.note_pool[1] == "C#"

    print("  [OK] scale derivation")


FORMAT_ERROR_CASES = [
    {"tonic": "H"},
    {"tonic": "c"},
    {"tonic": "C##"},
    {"tonic": 0},
    {"scale_name": "Major"},
    {"scale_name": "harmonic minor"},
    {"scale_name": ""},
    {"use_flats": "yes"},
    {"use_flats": 1},
    {"beats_per_phrase": 0},
    {"beats_per_phrase": 2.5},
    {"beats_per_phrase": True},
    {"duration_pool": ["qn", "zz"]},
    {"duration_pool": "some"},
    {"remove_chord_policy": "random"},
    {"max_attempts": 0},
    {"seed": "abc"},
]


@pytest.mark.parametrize("kwargs", FORMAT_ERROR_CASES)
def test_format_errors(kwargs):
    with pytest.raises(ConfigurationFormatError):
        DiceConfig(**kwargs)


def test_unknown_scale_fails_lazily():
    config = DiceConfig(scale_name="nosuch")

    with pytest.raises(UnknownScaleError):
        config.note_pool
    with pytest.raises(UnknownScaleError):
        config.interval_pool

    # Pools that do not depend on the scale still work
    assert config.durations == DEFAULT_DURATION_POOL

    print("  [OK] unknown scale fails on first derivation")


def test_derived_pools_are_cached():
    config = DiceConfig(tonic="G", scale_name="mixolydian")

    assert config.note_pool is config.note_pool
    assert config.interval_pool is config.interval_pool
    assert config.partitioner is config.partitioner
    assert isinstance(config.partitioner, DurationPartitioner)
    assert config.partitioner.beats == 4
    assert config.partitioner.pool == DEFAULT_DURATION_POOL


def test_explicit_pools_override_derivation():
    config = DiceConfig(scale_name="major", notes=[60, 62, 64], intervals=[3, 4])

    assert config.note_pool == (60, 62, 64)
    assert config.interval_pool == (3, 4)

    notes_only = DiceConfig(scale_name="major", notes=["C", "G"])
    assert notes_only.interval_pool == (2, 2, 1, 2, 2, 2, 1)


def test_all_durations():
    config = DiceConfig(duration_pool="all", beats_per_phrase=2)
    assert config.durations == ALL_DURATIONS
    assert config.partitioner.pool == ALL_DURATIONS
    for _ in range(100):
        assert total_beats(config.partitioner.motif()) == 2


def test_config_is_immutable():
    config = DiceConfig(octave_range=[4, 5], chord_qualities_by_triad={"major": ["", "6"]})

    assert config.octave_range == (4, 5)
    assert config.chord_qualities_by_triad == {"major": ("", "6")}
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.tonic = "D"

    with pytest.raises(TypeError):
        config.chord_qualities_by_triad["major"] = ("X",)
    with pytest.raises(AttributeError):
        config.mode_degree_masks.clear()
    assert config.chord_qualities_by_triad["major"] == ("", "6")
    assert len(config.mode_degree_masks) == 7

    changed = config.replace(tonic="D", scale_name="major")
    assert changed.note_pool[0] == "D"
    assert config.tonic == "C"
    assert changed.chord_qualities_by_triad == config.chord_qualities_by_triad

    print("  [OK] immutable config")


def test_config_is_hashable():
    assert hash(DiceConfig()) == hash(DiceConfig())
    assert DiceConfig(seed=1) != DiceConfig(seed=2)

    configs = {DiceConfig(scale_name="major"): "major", DiceConfig(scale_name="minor"): "minor"}
    assert configs[DiceConfig(scale_name="major")] == "major"


def test_serialization_round_trip():
    config = DiceConfig(tonic="Bb", scale_name="dorian", chord_voice_counts=[2, 3], seed=9)

    data = config.to_dict()
    assert data["tonic"] == "Bb"
    assert data["chord_voice_counts"] == [2, 3]
    assert "_cache" not in data and "_lock" not in data

    assert DiceConfig.from_dict(data) == config
    assert DiceConfig.from_json(config.to_json()) == config

    with pytest.raises(ConfigurationFormatError):
        DiceConfig.from_dict({"tonic": "C", "verbose": True})

    print("  [OK] serialization round trip")


def test_default_config_ships_with_package():
    path = default_config_path()
    package_dir = pathlib.Path(music_dice.__file__).parent

    assert path.is_file()
    assert package_dir in path.parents
    assert "dice" in load_config(path)


def test_from_yaml():
    assert DiceConfig.from_yaml() == DiceConfig()

    with tempfile.TemporaryDirectory() as tmp:
        path = pathlib.Path(tmp) / "dice.yaml"
        path.write_text(
            "dice:\n"
            "  tonic: A\n"
            "  scale_name: minor\n"
            "  duration_pool: [hn, qn]\n"
            "  seed: 3\n"
        )
        config = DiceConfig.from_yaml(path)
        assert config.note_pool == ("A", "B", "C", "D", "E", "F", "G")
        assert config.durations == ("hn", "qn")
        assert config.seed == 3

        flat = pathlib.Path(tmp) / "flat.yaml"
        flat.write_text("scale_name: major\n")
        assert DiceConfig.from_yaml(flat, section=None).scale_name == "major"

        with pytest.raises(FileNotFoundError):
            DiceConfig.from_yaml(pathlib.Path(tmp) / "missing.yaml")

    print("  [OK] yaml loading")


def main():
    """Run all tests."""
    print("=" * 60)
    print("Music Dice - Configuration Tests")
    print("=" * 60)

    test_defaults()
    test_scale_derivation()
    for kwargs in FORMAT_ERROR_CASES:
        test_format_errors(kwargs)
    print(f"  [OK] {len(FORMAT_ERROR_CASES)} format errors rejected")
    test_unknown_scale_fails_lazily()
    test_derived_pools_are_cached()
    test_explicit_pools_override_derivation()
    test_all_durations()
    test_config_is_immutable()
    test_config_is_hashable()
    test_serialization_round_trip()
    test_default_config_ships_with_package()
    test_from_yaml()

    print("\nAll tests passed!")


if __name__ == "__main__":
    main()
