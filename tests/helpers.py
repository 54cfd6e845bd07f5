class FakeProvider:
    """ExpressionProvider returning canned base scores (or raising)."""
    def __init__(self, scores=None, error=None):
        self.scores = scores
        self.error = error
        self.calls = 0

    async def expressions(self, image):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.scores


class FakeDetector:
    """FaceDetector returning queued boxes (None once exhausted) or raising."""
    def __init__(self, results=None, error=None):
        self.results = list(results or [])
        self.error = error
        self.calls = 0

    async def detect(self, frame):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.results.pop(0) if self.results else None
