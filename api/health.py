"""Health check endpoint."""

from http.server import BaseHTTPRequestHandler

LIVENESS_TEXT = "LegalBot running ✅"


def write_liveness(request_handler: BaseHTTPRequestHandler) -> None:
    """Write the plain-text liveness response."""
    body = LIVENESS_TEXT.encode('utf-8')
    request_handler.send_response(200)
    request_handler.send_header('Content-Type', 'text/plain; charset=utf-8')
    request_handler.send_header('Content-Length', str(len(body)))
    request_handler.end_headers()
    request_handler.wfile.write(body)


class handler(BaseHTTPRequestHandler):
    """Health check handler for Vercel serverless function."""

    def do_GET(self):
        """Handle GET request."""
        write_liveness(self)

    def do_POST(self):
        """Handle POST request (same as GET for health check)."""
        self.do_GET()
