from .reading import Reading
from .entry import Entry
