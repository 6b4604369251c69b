"""WorkTrack Store package.

Local, offline-first record store for the work-tracking app. It is organized by
feature modules (attendance, worklogs, leaves, holidays, settings) on top of a
single SQLite file, with a snapshot manager for backup and restore.
"""
