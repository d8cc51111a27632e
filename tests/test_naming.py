"""
Station name canonicalization
"""
import pytest

from src.naming import base_station_name, canonical_station_name


NAMES = ["Bole", "Bole Station", "  Bole  ", "Bole Station ", "Arat Kilo", "Station", "Mexico Station Station", ""]


@pytest.mark.parametrize("name", NAMES)
def test_canonicalization_is_idempotent(name):
    once = canonical_station_name(name)
    assert canonical_station_name(once) == once


@pytest.mark.parametrize("name", ["Bole", "Bole Station", " Bole", "Bole Station  "])
def test_suffixed_and_bare_names_match(name):
    assert canonical_station_name(name) == "Bole Station"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_names_canonicalize_to_empty(name):
    assert canonical_station_name(name) == ""


def test_base_name_strips_single_suffix():
    assert base_station_name("Arat Kilo Station") == "Arat Kilo"
    assert base_station_name("Arat Kilo") == "Arat Kilo"
    assert base_station_name("Mexico Station Station") == "Mexico Station"
