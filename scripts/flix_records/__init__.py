"""flixrec record definitions.

Each module defines a typed ``Record`` subclass representing an entity kind.
Records are persisted one JSON object per line and managed through
``RecordManager`` collections.

Entity capabilities
-------------------
An entity kind declares, as class variables, everything the generic engine
needs to know about it:

* ``record_type``    — collection file stem (``user`` -> ``user.jsonl``).
* ``query_fields``   — queryable fields, in predicate priority order after ``id``.
* ``unique_fields``  — fields no two records may share.
* ``guarded_fields`` — fields whose overwrite asks for confirmation.

Default storage path
--------------------
Collections live under ``~/.flixrec/records/`` unless ``FlixRecords`` is given
another ``records_path``.
"""

from .flix_config import FlixConfig
from .flix_records import FlixRecords
from .user import User
from .video import Video
