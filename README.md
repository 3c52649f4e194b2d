# visualsync

Building blocks for an audio-reactive lighting show made of LED tubes that
are driven over a wireless broadcast link. The package holds the parts of a
show controller that do not depend on a GUI toolkit or on a particular
transport.

## Modules

- **`visualsync.messages`**: the payloads sent to the tubes:
  `PeakData`, `SyncRequest`, `UpdateRequest`, `DmxData`, `ConfigData`,
  `SyncData`, `PatternData` and `TextData`. Each validates its fields
  (bytes in 0..255, fixed array lengths, text of at most 49 UTF-8 bytes)
  and has a `pack()` method returning its byte layout.
  `ConfigData.from_bytes()` decodes a configuration; fields missing from a
  short payload read as zero.
- **`visualsync.processor`**: `WifiEventProcessor` turns text events, peaks,
  DMX colours, configuration and sync requests into packed messages and
  calls a `send(payload, destination_mac)` function you supply. A `registry`
  callable supplies the MAC addresses of the known tubes, in order.
  `send_config()` numbers the tubes by their position in the registry;
  `send_config_to()` sends one tube its offset from `tube_offsets`;
  `send_sync_config()` broadcasts `tube_groups` and `tube_offsets` (at most
  32 each). `handle_packet()` reacts to a received packet: a one-byte hello
  is answered with the tube's configuration. Objects implementing
  `TextEventReceiver` and passed to `register_receiver()` see every text
  event. `mac_to_string()` formats a MAC address as upper-case hex.
  `peak_event()` and `send_dmx()` pause for `send_delay` seconds (0.01 by
  default) around sending.
- **`visualsync.project`**: `ProjectModel` (name, bpm, events) and
  `EventModel` (start, duration, lane, text), with `to_dict()`/`from_dict()`
  and `ProjectModel.save()`/`ProjectModel.load()` for JSON files.
- **`visualsync.presets`**: `PresetModel`, `TubePreset` and `TubePresetModel`
  (per-tube delay and group keyed by MAC string, with `to_json()` and
  `from_json()`). `read_presets(model_type, path)` reads a JSON array of
  presets; a file that cannot be opened yields 100 presets named `"empty"`,
  and a file that is not a JSON array yields an empty list.
  `save_presets(presets, path)` writes them back.
- **`visualsync.track`**: `Track` items on lanes, with hover, press, move and
  release handling for moving and resizing, grid snapping via `snap_x()`,
  and `TrackGroup` for moving a selection as one.
- **`visualsync.timeline`**: `TimeLine` holds tracks on a tempo grid with
  zoom (`zoom_by()`), rectangle selection (`select()`), `copy()`, `paste()`
  and `delete_selection()`. `build_event_list()` turns the tracks into
  events sorted by start; `check_time()` sends each started event's text to
  the processor, and a single space once the event has ended. Playback time
  is kept by an internal clock that can be set (`set_time()`), paused
  (`set_paused()`) and wraps at the track length (`set_track_time()`).
- **`visualsync.spectrum`**: `SpectrumDisplay` smooths left and right
  spectra and builds triangle geometry (`Vertex2D` lists) for drawing them;
  `generate_polyline_quads()`, `signed_log_scale()` and
  `inverse_log_scale()` are available on their own.
- **`visualsync.tube`**: `TubeSimulation` computes the brightness of the 20
  segments of an on-screen tube per frame; `TubeControl` holds a tube's
  MAC, delay and group (clamped to 0..1000) and schedules peaks and sync
  pulses after the tube's delay, reacting only to peaks of its own group.
- **`visualsync.controls`**: a lockable `Slider` with `increment()` and
  `decrement()`, and a `PresetButton` whose `release()` reports a
  `ButtonEvent` telling a short click from a long press.
- **`visualsync.netdevice`**: `NetDevice` brings a Linux network interface
  up or down (`set_interface()`), switches a wireless interface to monitor
  mode (`enable_monitor_mode()`), both raising `OSError` on failure, and
  `check_interface()` reports whether the interface flags can be read.
  These calls need the right privileges and work on Linux only.

The package uses only the Python standard library and supports Python 3.10
and later.

## Example

Send a colour peak to every tube in group 2, collecting the frames instead
of transmitting them:

```python
from visualsync.processor import WifiEventProcessor

frames = []

def send(payload, destination):
    frames.append((destination, payload))

my_mac = bytes([0x02, 0x00, 0x00, 0x00, 0x00, 0x01])
processor = WifiEventProcessor(my_mac, send, registry=lambda: [])
processor.peak_event(hue=128, sat=255, group=2)
```

Build a small show on a timeline and let playback drive the processor:

```python
from visualsync.timeline import TimeLine

timeline = TimeLine(processor)
timeline.set_bpm(120)
timeline.set_track_time(60.0)
timeline.add_item(1.0, 2.0, 0, "HELLO", (0, 255, 0))
timeline.build_event_list()
timeline.check_time(1.5)   # "HELLO" is sent
timeline.check_time(3.5)   # the text is cleared with a single space
```

## What the package does not do

- It has no graphical interface and no command-line program; the timeline,
  controls, spectrum and tube classes are models that a front end can draw.
- It does not transmit or receive radio frames itself: packets go to the
  `send` function you pass in, and received packets must be handed to
  `WifiEventProcessor.handle_packet()`.
- It does not capture or analyse audio: `SpectrumDisplay` takes spectrum
  levels that were computed elsewhere.
- It keeps no list of known tubes; the `registry` callable provides it.

## Running the tests

Install the package with its `test` extra and run `pytest` from the project
directory.