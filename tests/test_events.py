import unittest

from tonal_tuner.core.events import DetectionEvents, DetectionEventType, EventEmitter


class TestEventEmitter(unittest.TestCase):
    def test_on_emit_off(self):
        emitter = EventEmitter()
        received = []
        callback = received.append

        emitter.on("tick", callback)
        emitter.on("tick", callback)
        self.assertTrue(emitter.has_listeners("tick"))

        emitter.emit("tick", 1)
        self.assertEqual(received, [1])

        emitter.off("tick", callback)
        emitter.emit("tick", 2)
        self.assertEqual(received, [1])
        self.assertFalse(emitter.has_listeners("tick"))

    def test_failing_listener_does_not_stop_others(self):
        emitter = EventEmitter()
        received = []

        def broken(value):
            raise RuntimeError("boom")

        emitter.on("tick", broken)
        emitter.on("tick", received.append)
        emitter.emit("tick", 3)
        self.assertEqual(received, [3])

    def test_clear(self):
        emitter = EventEmitter()
        emitter.on("tick", print)
        emitter.clear()
        self.assertFalse(emitter.has_listeners("tick"))


class TestDetectionEvents(unittest.TestCase):
    def test_wants_only_registered_events(self):
        events = DetectionEvents()
        self.assertFalse(events.wants(DetectionEventType.PITCH_DETECTED))

        results = []
        events.on_pitch_detected(results.append)
        self.assertTrue(events.wants(DetectionEventType.PITCH_DETECTED))
        self.assertFalse(events.wants(DetectionEventType.PEAKS_FOUND))

        events.emit_pitch_detected("result")
        self.assertEqual(results, ["result"])

        events.clear()
        self.assertFalse(events.wants(DetectionEventType.PITCH_DETECTED))


if __name__ == "__main__":
    unittest.main()
