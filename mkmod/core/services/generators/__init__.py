"""
Generators — produce module boilerplate from a resolved module.

Each generator returns ``GeneratedFile`` instances; writing them to
disk is the module writer's job.
"""
