"""Announcements notifier — pushes FCM topic notifications for new Firestore records."""
