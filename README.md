# artefact

Audio synthesis building blocks that work on NumPy arrays. Multi-channel
buffers are shaped `(channels, samples)`.

- `artefact.forge_voice.ForgeVoice`: a looping sample voice with pitch,
  speed, host-tempo sync, volume, tanh drive and bit crushing.
- `artefact.forge_processor.ForgeProcessor`: eight `ForgeVoice` slots, PCM
  WAV loading (`read_wav`) and a shared host tempo. `ParameterBridge` holds
  one `SlotParameters` record per slot.
- `artefact.canvas_processor.CanvasProcessor`: additive resynthesis of an
  image. Each pixel row drives a sine partial. The row sets its frequency on
  a logarithmic scale with the top row highest, the brightness sets its
  amplitude and the hue sets its pan.
- `artefact.sound_renderer`: `StrokeCanvas` records drag positions as
  normalised `StrokePoint`s. `render_from_canvas` turns them into short mono
  sine bursts, and `write_wav` saves the result as 16-bit PCM.
- `artefact.commands`: the `Command` message with the `ForgeCommandID` and
  `PaintCommandID` enums, and the bounded FIFO `CommandQueue`.
- `artefact.oscillator`: `Point`, `AudioParams`, `PaintStrokePoint` and a
  sine `Oscillator` with smoothed amplitude and pan.
- `artefact.colour.Colour`: an ARGB colour with HSB brightness, hue and
  saturation.
- `artefact.smoothing.LinearSmoothedValue`: a value that ramps linearly to
  its target.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Sample voices

```python
import numpy as np
from artefact.forge_processor import ForgeProcessor

forge = ForgeProcessor()
forge.prepare_to_play(44100.0, 256)
forge.load_sample_into_slot(0, "loop.wav")   # False if nothing was loaded

voice = forge.voice(0)
voice.set_pitch(-12)        # semitones
voice.set_sync_mode(True)   # follow host tempo; samples are taken as 120 BPM
forge.set_host_bpm(90)
voice.start()

block = np.zeros((2, 256))
forge.process_block(block)  # adds every playing voice into the block
```

Setter ranges:

- Speed is clamped to 0.1 to 4.0.
- Drive is clamped to 1 to 10.
- Crush is clamped to 1 to 16 bits, and 16 means no crushing.

`voice(index)` raises `IndexError` outside 0 to 7.

## Playing an image

```python
import numpy as np
from artefact.canvas_processor import CanvasProcessor

canvas = CanvasProcessor()
canvas.prepare_to_play(44100.0, 512)

image = np.zeros((64, 128, 3), dtype=np.uint8)   # (h, w), (h, w, 3) or (h, w, 4)
image[10, :, 0] = 255
canvas.update_from_image(image)
canvas.set_active(True)
canvas.set_playhead_position(0.25)               # column, 0..1

block = np.zeros((2, 512))
canvas.process_block(block)                      # overwrites the block
```

The frequency range defaults to 20 Hz to 20 kHz. You can change it with
`set_frequency_range`.

The processor keeps at most `max_partials` partials (512 by default). It
reads one column per block.

## Rendering strokes to a WAV file

```python
from artefact.sound_renderer import StrokeCanvas, render_from_canvas, write_wav

strokes = StrokeCanvas()
strokes.drag(100, 300, 800, 600)   # pointer position inside an 800x600 surface
strokes.drag(400, 150, 800, 600)

samples = render_from_canvas(strokes.strokes, 44100, 2.0)
write_wav("spectral_output.wav", samples, 44100)
```

Each point becomes a 2000-sample sine burst at amplitude 0.3. The burst
frequency is mapped linearly from 50 Hz to 5 kHz.

## Commands

```python
from artefact.commands import Command, CommandQueue, ForgeCommandID

queue = CommandQueue(capacity=64)   # holds up to capacity - 1 commands
queue.push(Command(ForgeCommandID.SET_VOLUME, int_param=0, float_param=0.8))
command = queue.pop()               # None when empty
```

`push` returns `False` when the queue is full.

Commands with an id below 200 are forge commands, and 200 and above are
paint commands. `forge_id()` and `paint_id()` raise `ValueError` for ids
that do not belong to their enum.

## What is not included

- **No paint engine.** Nothing here stores brush strokes on a canvas or
  synthesises them. `Point`, `PaintStrokePoint` and `Oscillator` are only
  the pieces such an engine would use.
- **No command handling.** No processor takes `Command`s from a queue, acts
  on them, or switches between sample and canvas modes. Your code has to
  read the queue and call the engines itself.
- **No device output and no user interface.** There is no audio device
  output, no plugin host integration and no user interface.
- **No image-file loading.** Images must be passed in as arrays.
- **WAV only.** Sample loading reads PCM WAV files only.