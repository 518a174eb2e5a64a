# Month planner: date-ranged tasks laid out on a month calendar
#
# Components:
#   schema.py   - Data model (Day, Category, Task)
#   grid.py     - Month grid enumeration and navigation
#   storage.py  - Persistence backends (memory, JSON file, SQLite)
#   events.py   - Change notifications for the rendering layer
#   store.py    - Task store (CRUD + persistence sync)
#   filters.py  - Category / time window / search filtering
#   pointer.py  - Pointer interaction state machine (select, move, resize)
#   form.py     - Create/edit form controller
#   planner.py  - Facade wiring the above for a UI
#   config.py   - YAML configuration and logging setup
