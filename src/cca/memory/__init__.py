"""Knowledge tree — project → domain → topic markdown notes.

Layout:
    ~/.context-capturing-agents/
    └── <project>/                     # basename of the analyzed codebase
        ├── EXPLORATION.md             # explorer output, read by the writer
        ├── Architecture/              # domain
        │   ├── overview.md            # topic
        │   └── patterns.md
        └── API/
            └── endpoints.md

Which project a request targets is decided by ``ProjectResolver``.
"""
