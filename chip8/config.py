# CHIP-8 configuration
#----------------------------------------------------------------------------------------------
# Screen, clock and sound settings shared by the core and the pyglet host.
# The CPU rate is split into batches: every 1/TIMER_HZ seconds the host runs
# CPU_HZ / TIMER_HZ cycles and then ticks the delay/sound timers once.

import os

# screen
WIDTH, HEIGHT = 64, 32
SCALE = 10

# clocks
CPU_HZ = 600
TIMER_HZ = 60

# beep
BEEP_FREQUENCY = 440
BEEP_DURATION = 0.2
BEEP_PITCH_VARIATION = 15
SAMPLE_RATE = 44100

# make it true if you want the logs (DEBUG=1 in the environment, or F1 in the window)
logs_on = int(os.getenv('DEBUG', 0)) >= 1


def log(*args):
    if logs_on:
        print(*args)


def set_logs(enabled):
    global logs_on
    logs_on = bool(enabled)
    return logs_on
