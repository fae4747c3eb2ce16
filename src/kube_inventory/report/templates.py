"""Message templates for the inventory report."""

CONNECTING = "Attempting to connect to Kubernetes cluster..."

CONNECTED = "Successfully connected to Kubernetes cluster!"

VERSION_LINE = "{label}: {value}"

RECOVERABLE_FAILURE = "Could not get {label}: {error}"

FATAL_FAILURE = "Failed to get {label}: {error}"

ENDPOINTS_TITLE = "Detected Exposed Endpoints"

NO_ENDPOINTS = "No exposed LoadBalancer, NodePort services, or Ingresses found."
