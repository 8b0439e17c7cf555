class UpstreamError(Exception):
    """Errore generico nella chiamata all'API Football."""


class UpstreamUnavailableError(UpstreamError):
    """Sollevata per errori di rete (connessione, timeout, DNS) verso l'API Football."""


class InvalidPayloadError(UpstreamError):
    """Sollevata quando l'API Football risponde con un body non JSON."""
