DEPLOYMENT_NOT_FOUND = "Could not find deployment with id %s, %s"
APPLICATION_NOT_FOUND = "Could not find application with name %s for deployment %s, %s"
TARGET_NOT_FOUND = "Could not find target with name %s for deployment %s, %s"
USER_NOT_FOUND = "Could not find user with id %s for deployment %s, %s"
NOTIFICATIONS_DISABLED = "Notifications disabled for %s on %s, skipping deployment %s"
COULD_NOT_RENDER_SUMMARY = "Could not generate deployment summary for deployment %s, %s"
COULD_NOT_ENCODE_MESSAGE = "Error creating Slack notification for deployment %s, %s"
DELIVERY_FAILED = "Error while notifying Slack about deployment of %s on %s, %s! err: %s, resp: %s"
DELIVERY_SUCCEEDED = "Successfully notified Slack about deployment of %s on %s, %s!"
IGNORING_MALFORMED_ENTRY = "Ignoring malformed log entry %r, %s"
LISTENER_STOPPED = "Log stream closed, %d notification(s) dispatched"
COULD_NOT_READ_STREAM = "Stopped reading log entries, %s"

# CLI
NOTIFICATION_SENT = "✔ Notification for deployment {} delivered"
NOTIFICATION_SKIPPED = "✔ Notifications are disabled for deployment {}, nothing sent"
NOTIFICATION_NOT_SENT = "✘ Notification for deployment {} not sent ({})"
COULD_NOT_READ_INPUT = "✘ Could not read log entries: {}"
CONFIG_CREATED = "✔ Configuration file created: {}"
