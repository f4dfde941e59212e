"""Student attendance package.

Feature modules (attendance, courses, users) sit on top of small core/common
layers. Services depend on repository protocols; MySQL and Flask adapters
are wired together in ``container`` and ``main``.
"""
