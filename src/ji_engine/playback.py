"""Render ratios as audible dyads in a MIDI file.

A ratio is heard as a root tone (middle C), then the tone the ratio places
above it, then both together. Each voice gets its own channel so that its
pitch bend can carry the exact JI (or EDO) frequency.
"""
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import List, Tuple

from mido import Message, MetaMessage, MidiFile, MidiTrack, bpm2tempo

from .interval import TwelveEdoInterval
from .ratio import Ratio

logger = logging.getLogger(__name__)

MIDDLE_C_HZ = 440.0 * 2.0 ** (-9.0 / 12.0)
BEND_RANGE_SEMITONES = 2.0
ROOT_CHANNEL = 0
INTERVAL_CHANNEL = 1


@dataclass
class MidiEvent:
    note: int
    vel: int
    start_abs_tick: int
    dur_tick: int
    channel: int = ROOT_CHANNEL
    bend: int = 0  # pitchwheel value sent just before the note starts


def seconds_to_ticks(seconds: float, ppq: int, bpm: float) -> int:
    """One beat lasts 60/BPM seconds and holds PPQ ticks."""
    return int(round(seconds * ppq * bpm / 60.0))


def freq_to_midi(hz: float, bend_range: float = BEND_RANGE_SEMITONES) -> Tuple[int, int]:
    """Nearest MIDI note to `hz` plus the pitchwheel value that reaches it exactly.

    >>> freq_to_midi(440.0)
    (69, 0)
    """
    if hz <= 0:
        raise ValueError(f"frequency must be positive, got {hz}")
    exact = 69.0 + 12.0 * math.log2(hz / 440.0)
    note = math.floor(exact + 0.5)
    if not 0 <= note <= 127:
        raise ValueError(f"{hz:.3f} Hz is outside the MIDI note range")
    bend = int(round((exact - note) / bend_range * 8192))
    return note, max(-8192, min(8191, bend))


def _tone(hz: float, start: int, dur: int, channel: int, vel: int) -> MidiEvent:
    note, bend = freq_to_midi(hz)
    return MidiEvent(note=note, vel=vel, start_abs_tick=start, dur_tick=dur, channel=channel, bend=bend)


def dyad_events(
    root_hz: float,
    interval_hz: float,
    tone_ticks: int,
    start_tick: int = 0,
    sequential: bool = True,
    vel: int = 80,
) -> List[MidiEvent]:
    """Root then interval (if `sequential`), then both sounding together."""
    events: List[MidiEvent] = []
    t = start_tick
    if sequential:
        events.append(_tone(root_hz, t, tone_ticks, ROOT_CHANNEL, vel))
        events.append(_tone(interval_hz, t + tone_ticks, tone_ticks, INTERVAL_CHANNEL, vel))
        t += 2 * tone_ticks
    events.append(_tone(root_hz, t, tone_ticks, ROOT_CHANNEL, vel))
    events.append(_tone(interval_hz, t, tone_ticks, INTERVAL_CHANNEL, vel))
    return events


def ratio_events(ratio: Ratio, tone_ticks: int, root_hz: float = MIDDLE_C_HZ, start_tick: int = 0) -> List[MidiEvent]:
    return dyad_events(root_hz, ratio.frequency(root_hz), tone_ticks, start_tick=start_tick)


def compare_events(
    ratio: Ratio,
    tone_ticks: int,
    gap_ticks: int,
    root_hz: float = MIDDLE_C_HZ,
) -> List[MidiEvent]:
    """The ratio's full sequence, a rest, then the nearest 12-EDO dyad."""
    events = ratio_events(ratio, tone_ticks, root_hz=root_hz)
    et: TwelveEdoInterval = ratio.to_approximate_equal_tempered_interval().interval
    start = 3 * tone_ticks + gap_ticks
    events.extend(
        dyad_events(root_hz, et.frequency(root_hz), tone_ticks, start_tick=start, sequential=False)
    )
    return events


def write_midi(events: List[MidiEvent], ppq: int, bpm: float, out_path: str) -> None:
    """
    Write a single-track MIDI file using absolute tick scheduling.
    Steps:
      - create track, set tempo meta
      - sort by (tick, note_off before everything else); the sort is stable,
        so each pitchwheel stays directly in front of its own note_on
      - delta-encode times
    """
    mid = MidiFile(type=1)
    mid.ticks_per_beat = int(ppq)

    track = MidiTrack()
    mid.tracks.append(track)
    track.append(MetaMessage("set_tempo", tempo=bpm2tempo(bpm), time=0))

    msgs = []
    for ev in events:
        start = ev.start_abs_tick
        end = ev.start_abs_tick + max(1, ev.dur_tick)
        msgs.append((start, 1, Message("pitchwheel", pitch=ev.bend, channel=ev.channel, time=0)))
        msgs.append((start, 1, Message("note_on", note=ev.note, velocity=ev.vel, channel=ev.channel, time=0)))
        msgs.append((end, 0, Message("note_off", note=ev.note, velocity=0, channel=ev.channel, time=0)))

    msgs.sort(key=lambda t: (t[0], t[1]))

    last_t = 0
    for abs_t, _prio, msg in msgs:
        msg.time = max(0, abs_t - last_t)
        track.append(msg)
        last_t = abs_t

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    mid.save(out_path)
    logger.debug("wrote %d events to %s (ppq=%d, bpm=%s)", len(events), out_path, ppq, bpm)
