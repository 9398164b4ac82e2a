import pytest

from musiccatalog.core.consensus import (BitrateConsensus, ConsensusValue, GenreConsensus,
                                         UNKNOWN, VBR, is_conflict)


def fold(accumulator, tokens):
    for token in tokens:
        accumulator.offer(token)
    return accumulator.value


@pytest.mark.parametrize(
    "tokens,expected",
    [
        ([], ""),
        (["128"], "128"),
        (["128", "128", "128"], "128"),
        (["128", "192"], VBR),
        (["128", "192", "128"], VBR),
        (["FLAC", "FLAC"], "FLAC"),
        (["128", "FLAC"], UNKNOWN),
        (["FLAC", "128"], UNKNOWN),
        (["FLAC", "OGG"], UNKNOWN),
    ],
)
def test_bitrate_fold(tokens, expected):
    assert fold(BitrateConsensus(), tokens) == expected


@pytest.mark.parametrize(
    "tokens,expected",
    [
        ([], ""),
        (["Rock"], "Rock"),
        (["Rock", "Rock"], "Rock"),
        (["Rock", "Jazz"], UNKNOWN),
        (["Rock", "Jazz", "Rock"], UNKNOWN),
    ],
)
def test_genre_fold(tokens, expected):
    assert fold(GenreConsensus(), tokens) == expected


def test_offer_reports_only_the_transition_into_conflict():
    bitrate = BitrateConsensus()
    assert bitrate.offer("128") is False
    assert bitrate.offer("128") is False
    assert bitrate.offer("320") is True
    assert bitrate.offer("64") is False
    assert bitrate.value == VBR


def test_sentinels_are_sticky():
    unknown = BitrateConsensus(UNKNOWN)
    unknown.offer("128")
    unknown.offer("192")
    assert unknown.value == UNKNOWN

    vbr = BitrateConsensus(VBR)
    vbr.offer("FLAC")
    assert vbr.value == VBR


def test_accumulator_resumes_from_initial_value():
    bitrate = BitrateConsensus("128")
    assert bitrate.offer("192") is True
    assert bitrate.value == VBR


def test_missing_genre_is_a_conflict():
    genre = GenreConsensus()
    assert genre.offer_genre(None) is True
    assert genre.value == UNKNOWN
    assert genre.offer_genre("Rock") is False
    assert genre.value == UNKNOWN


def test_missing_genre_after_agreement():
    genre = GenreConsensus("Rock")
    assert genre.offer_genre("Rock") is False
    assert genre.offer_genre(None) is True
    assert genre.value == UNKNOWN


def test_state_properties():
    value = ConsensusValue()
    assert value.is_empty and not value.is_conflict
    value.offer("x")
    assert not value.is_empty and not value.is_conflict
    value.offer("y")
    assert value.is_conflict
    assert str(value) == UNKNOWN
    assert is_conflict(VBR) and is_conflict(UNKNOWN) and not is_conflict("128")
