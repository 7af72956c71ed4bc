"""Socket.IO event names shared with the React client."""

# client -> server
USER_ONLINE = "user-online"
SEND_MESSAGE = "send-message"
TYPING = "typing"

# server -> client
RECEIVE_MESSAGE = "receive-message"
USER_TYPING = "user-typing"
USER_STATUS = "user-status"

STATUS_ONLINE = "online"
STATUS_OFFLINE = "offline"
