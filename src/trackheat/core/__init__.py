from .point import Location, Trackpoint
from .segment import Segment
from .track import Track
from .stream import SEGMENT_BREAK, SegmentBreak, TrackStream, load_track

__all__ = [
    'Location',
    'Trackpoint',
    'Segment',
    'Track',
    'SEGMENT_BREAK',
    'SegmentBreak',
    'TrackStream',
    'load_track',
]
