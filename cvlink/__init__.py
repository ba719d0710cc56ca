"""
cvlink - Configuration transport for link-shared resumes

Transports a resume document and its tech style registry entirely through a URL,
with no server-side persistence. A viewer opens a link; the link alone reproduces
the configuration the author built.

Architecture:
- Transport Context: URL obfuscation, compression and remote JSON fetch
- Validation Context: Structural validation of candidate documents
- Loading Context: Tech registry cache and document loading with fallbacks
- Authoring Context: Example data and shareable link generation
"""

__version__ = "0.1.0"
