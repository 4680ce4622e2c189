from tb.core.engine import Renderer

PENDING = "pending"
ACTIVE = "active"
DONE = "done"


# Grid-side mirror of the engine's progress. Keeps which dots are done and which one is current, so any front end can
# ask for per-dot states instead of re-deriving them from events.
class GridModel(Renderer):

    def __init__(self, dot_count=0):
        self.dot_count = dot_count
        self.completed = 0
        self.active_index = None

    def rebuild(self, dot_count):
        self.dot_count = dot_count
        self.completed = 0
        self.active_index = None

    def progress_changed(self, completed, total):
        if total != self.dot_count:
            self.rebuild(total)
        self.completed = max(0, min(total, completed))

    def active_dot_changed(self, index):
        self.active_index = index

    # A done dot never shows as active, even if the engine still points at it.
    def state_of(self, index):
        if index < self.completed:
            return DONE
        if index == self.active_index:
            return ACTIVE
        return PENDING

    def states(self):
        return [self.state_of(i) for i in range(self.dot_count)]
