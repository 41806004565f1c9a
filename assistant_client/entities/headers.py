"""HTTP header constants for the API transport."""

HEADER_AUTHORIZATION = "Authorization"
HEADER_OPENAI_BETA = "OpenAI-Beta"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_ACCEPT = "Accept"

# Common header values
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_EVENT_STREAM = "text/event-stream"
BEARER_PREFIX = "Bearer"
