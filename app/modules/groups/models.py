# Groups are persisted as JSON documents in the backing blob store.
# This file documents the persisted layout.
# Actual reads and writes are handled by GroupService in service.py

"""
Backing store layout:

_groups/{groupId}.json:
- id: string (uuid4)
- name: string
- adminCode: string (8 chars, uppercase alphabet without I/O/0/1; unique across groups)
- createdAt: ISO-8601 timestamp (UTC)
- members: list of
    - code: string (6 chars, lowercase alphabet; unique across every group's members)
    - label: string
    - active: bool (false once revoked; revoked members are never removed)

{groupId}/games/{gameId}.json, {groupId}/roster.json, {groupId}/week/{date}.json:
- written directly by browser clients holding delegated storage URLs; opaque to the server
"""
