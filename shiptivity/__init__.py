# Shiptivity: client swimlanes with dense per-lane priorities
#
# Components:
#   schema.py    - Data model (Client, Lane)
#   errors.py    - Client-facing and storage error types
#   validator.py - Input checks for id, status and priority
#   rerank.py    - Pure re-ranking engine (lane/priority moves)
#   store.py     - SQLite persistence layer with atomic bulk writes
#   seed.py      - Fixed initial client set
#   config.py    - YAML + environment configuration
