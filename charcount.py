class CharCountStream(object):
    """An output stream wrapper that keeps track of the number of characters
    written through it."""

    def __init__(self, stream, count=0):
        self.stream = stream
        self.count = count

    def write(self, str):
        self.count += len(str)
        self.stream.write(str)
