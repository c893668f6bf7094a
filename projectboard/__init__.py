# Project board: reactive project store and drag-and-drop lane transfer
#
# Components:
#   schema.py     - Data model (Project, ProjectStatus, snapshots)
#   state.py      - In-memory store with ordered listener notification
#   validation.py - Field validation descriptors for the input form
#   surface.py    - Rendering surface (element tree, templates, HTML output)
#   dnd.py        - Drag transfer channel, payloads, Draggable/DropTarget
#   views.py      - ProjectItem, ProjectList, ProjectInput
#   board.py      - Wires one store to the input form and both lanes
#   config.py     - YAML/environment configuration
