# Host window
#----------------------------------------------------------------------------------------------
# We're subclassing pyglet (it handles graphics, sound output and keyboard handling)
# and overriding whatever we need from there. The window owns no machine state: it latches
# the keys, asks the Emulator for one frame every 1/TIMER_HZ seconds and presents the result.

import random
import sys

import numpy as np
import pyglet
from pyglet.media import synthesis
from pyglet.window import key

from . import config
from .config import (
    WIDTH, HEIGHT, SCALE, TIMER_HZ,
    BEEP_FREQUENCY, BEEP_DURATION, BEEP_PITCH_VARIATION, SAMPLE_RATE,
    log,
)
from .keypad import KEY_COUNT

#map binding keys
keymap = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}

FOREGROUND = (255, 255, 255)
BACKGROUND = (0, 0, 0)


class Chip8Window(pyglet.window.Window):

    def __init__(self, emulator, title="CHIP-8 Emulator", scale=SCALE):
        self.scale = scale
        self.window_width, self.window_height = WIDTH * scale, HEIGHT * scale
        super().__init__(
            width=self.window_width,
            height=self.window_height,
            caption=title,
            vsync=False
        )
        self.emulator = emulator
        self.keys = np.zeros(KEY_COUNT, dtype=bool)
        self.error = None
        self.sound_playing = False

        # Pre-allocated small framebuffer (64x32 RGBA), upscaled with numpy.repeat
        self._small_framebuf = np.zeros((HEIGHT, WIDTH, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self.image = pyglet.image.ImageData(
            self.window_width,
            self.window_height,
            'RGBA',
            self._upscale().tobytes()
        )

        # Performance tracking counters
        self._fps_counter = 0
        self._cps_counter = 0
        self._bench_time = pyglet.clock.get_default().time()
        self.show_hud = False

        # Labels for HUD
        self.fps_label = pyglet.text.Label(
            "FPS: 0",
            font_size=12,
            x=5,
            y=self.window_height - 15,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )
        self.cps_label = pyglet.text.Label(
            "Cycles/s: 0",
            font_size=12,
            x=5,
            y=self.window_height - 30,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )

        # one emulator frame per timer tick (CPU batch + timers)
        pyglet.clock.schedule_interval(self.tick, 1 / TIMER_HZ)
        pyglet.clock.schedule_interval(self._update_bench, 1.0)

    # emulation
    def tick(self, dt):
        if self.error is not None:
            return
        result = self.emulator.frame(self.keys)
        self._cps_counter += self.emulator.cycles_per_frame

        if result.halted:
            self.crash(result.error)
            return

        if result.sound:
            if not self.sound_playing:
                self._play_beep()
        else:
            self.sound_playing = False

        display = self.emulator.machine.display
        if display.dirty:
            self.image.set_data('RGBA', self.window_width * 4, self._upscale(display.snapshot()).tobytes())
            display.dirty = False

    def crash(self, error):
        self.error = error
        print("Emulation error:", error, file=sys.stderr)
        print(f"********** THE EMULATOR CRASHED WITH THE FOLLOWING STATE\n{self.emulator.machine.dump()}",
              file=sys.stderr)
        self.close()

    def reboot(self):
        log("Rebooting")
        self.emulator.reset()
        self.keys.fill(False)
        self.sound_playing = False

    def _upscale(self, frame=None):
        if frame is not None:
            # pyglet's origin is bottom-left, CHIP-8's is top-left
            lit = np.flipud(frame)
            self._small_framebuf[..., :3] = np.where(lit[..., None], FOREGROUND, BACKGROUND)
        if self.scale != 1:
            return np.repeat(np.repeat(self._small_framebuf, self.scale, axis=0), self.scale, axis=1)
        return self._small_framebuf

    # sound
    def _play_beep(self, duration=BEEP_DURATION, frequency=BEEP_FREQUENCY, pitch_variation=BEEP_PITCH_VARIATION):
        freq = frequency + random.randint(-pitch_variation, pitch_variation)
        wave = synthesis.Sine(duration=duration, frequency=freq, sample_rate=SAMPLE_RATE)
        player = pyglet.media.Player()
        player.queue(wave)
        player.play()
        self.sound_playing = True

        # Ensure the sound stops after the requested duration
        def on_eos():
            self.sound_playing = False
            player.delete()

        player.on_eos = on_eos

    # FPS / CPS
    def _update_bench(self, dt):
        now = pyglet.clock.get_default().time()
        elapsed = now - self._bench_time
        if elapsed >= 1.0:
            self.fps_label.text = f"FPS: {self._fps_counter / elapsed:.1f}"
            self.cps_label.text = f"Cycles/s: {self._cps_counter / elapsed:.0f}"
            self._fps_counter = 0
            self._cps_counter = 0
            self._bench_time = now

    # draw
    def on_draw(self):
        self.clear()
        self.image.blit(0, 0)
        if self.show_hud:
            self.fps_label.draw()
            self.cps_label.draw()
        self._fps_counter += 1

    # keyboard
    def on_key_press(self, symbol, modifiers):
        #@Override
        if symbol == key.ESCAPE:
            self.close()
        elif symbol == key.R and modifiers & key.MOD_CTRL:
            self.reboot()
        elif symbol == key.F1:
            log("logsOn:", config.set_logs(not config.logs_on))
        elif symbol == key.F2:
            self.show_hud = not self.show_hud
        elif symbol in keymap:
            self.keys[keymap[symbol]] = True

    def on_key_release(self, symbol, modifiers):
        #@Override
        if symbol in keymap:
            self.keys[keymap[symbol]] = False

    def close(self):
        pyglet.clock.unschedule(self.tick)
        pyglet.clock.unschedule(self._update_bench)
        super().close()
