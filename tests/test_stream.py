import io
import logging

import pytest

from trackheat.core.point import Trackpoint
from trackheat.core.stream import SEGMENT_BREAK, TrackStream, load_track

SAMPLE = "10.0 20.0 1\n10.1 20.1 2\n\n10.2 20.2 3\n"


@pytest.fixture
def sample_file(tmp_path):
    d = tmp_path / "data"
    d.mkdir()
    p = d / "track.txt"
    p.write_text(SAMPLE)
    return p


def test_stream_points_and_breaks():
    items = list(TrackStream(io.StringIO(SAMPLE)))
    assert items == [
        Trackpoint(lat=10.0, lon=20.0, timestamp=1),
        Trackpoint(lat=10.1, lon=20.1, timestamp=2),
        SEGMENT_BREAK,
        Trackpoint(lat=10.2, lon=20.2, timestamp=3),
    ]


def test_stream_from_path(sample_file):
    items = list(TrackStream(sample_file).stream())
    assert len(items) == 4
    assert items[2] is SEGMENT_BREAK

    # a str path works as well and the stream can be replayed
    assert list(TrackStream(str(sample_file))) == items


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="File not found"):
        TrackStream(tmp_path / "nope.txt")


def test_malformed_lines_are_skipped(caplog):
    text = "1 2 3\nfoo bar baz\n4 5\n6 7 8.5\n9 10 11\n"
    with caplog.at_level(logging.WARNING):
        items = list(TrackStream(io.StringIO(text)))

    assert [p.timestamp for p in items] == [3, 11]
    assert "line 2" in caplog.text
    assert "line 3" in caplog.text
    assert "line 4" in caplog.text


def test_whitespace_only_line_is_a_break():
    items = list(TrackStream(["1 2 3\n", "   \t\n", "4 5 6\n"]))
    assert items[1] is SEGMENT_BREAK


def test_load_track_segments(sample_file, distance):
    track = load_track(sample_file, distance=distance)
    assert track.segment_count() == 2
    assert track.point_count(0) == 2
    assert track.point_count(1) == 1
    assert track.segment_lengths()[0] == pytest.approx(distance(
        Trackpoint(10.0, 20.0, 1), Trackpoint(10.1, 20.1, 2)
    ))


def test_load_track_drops_out_of_order_points(caplog):
    text = "0 0 5\n0 1 4\n\n\n0 2 5\n0 3 6\n"
    with caplog.at_level(logging.WARNING):
        track = load_track(io.StringIO(text))

    assert [p.timestamp for p in track.points()] == [5, 6]
    assert track.segment_count() == 2
    assert "t=4" in caplog.text
    assert caplog.text.count("Dropping out-of-order point") == 2


def test_load_empty_input():
    track = load_track(io.StringIO(""))
    assert track.segment_count() == 1
    assert track.total_points == 0
