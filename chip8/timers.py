# Timers - delay and sound counters, decremented at 60 Hz while nonzero


class Timers:
    def __init__(self):
        self.delay = 0
        self.sound = 0

    def tick(self):
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1
        return self.sound_active()

    def sound_active(self):
        return self.sound > 0

    def reset(self):
        self.delay = 0
        self.sound = 0
