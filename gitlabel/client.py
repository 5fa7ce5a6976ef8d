"""Thin REST client for the issue and label endpoints of a GitHub-style API.

Every call is independently fallible: transport and API errors are printed
as warnings and the call returns ``None`` instead of raising.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from gitlabel.config import DEFAULT_API_URL
from gitlabel.console import warn
from gitlabel.models import Label


@dataclass
class ClientOptions:
    token: str
    api_url: str = DEFAULT_API_URL
    user_agent: str = "git-label"
    session: Optional[requests.Session] = None


class LabelClient:
    """Label client safe to call from worker threads.

    Without an injected session every thread gets its own
    ``requests.Session``; an injected session is shared as given.
    """

    def __init__(self, options: ClientOptions):
        self.options = options
        self.api_url = options.api_url.rstrip('/')
        self._local = threading.local()
        if options.session is not None:
            self._prepare(options.session)

    def _prepare(self, session: requests.Session) -> requests.Session:
        session.headers.update(
            {
                'Authorization': f"Bearer {self.options.token}",
                'Accept': 'application/vnd.github+json',
            }
        )
        session.headers.setdefault('User-Agent', self.options.user_agent)
        return session

    @property
    def session(self) -> requests.Session:
        if self.options.session is not None:
            return self.options.session
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._prepare(requests.Session())
            self._local.session = session
        return session

    def _url(self, repository: str, *segments: str) -> str:
        path = '/'.join(quote(str(s), safe='') for s in segments)
        return f"{self.api_url}/repos/{repository}/{path}"

    def _send(self, method: str, url: str, payload: Optional[Dict[str, Any]] = None, decode: bool = True, subject: Optional[str] = None) -> Any:
        try:
            if payload is None:
                response = self.session.request(method, url)
            else:
                response = self.session.request(method, url, json=payload)
            response.raise_for_status()
            return response.json() if decode else True
        except requests.RequestException as exc:
            target = f" (label '{subject}')" if subject else ''
            warn(f"{method} {url}{target} failed: {exc}")
            return None

    # Reads -------------------------------------------------------------
    def list_issues(self, repository: str) -> Optional[List[Dict[str, Any]]]:
        return self._send('GET', self._url(repository, 'issues'))

    def list_issue_labels(self, repository: str, number: int) -> Optional[List[Label]]:
        data = self._send('GET', self._url(repository, 'issues', str(number), 'labels'))
        if data is None:
            return None
        return [Label.from_dict(item) for item in data]

    # Writes ------------------------------------------------------------
    def create_label(self, repository: str, label: Label) -> Optional[Dict[str, Any]]:
        return self._send('POST', self._url(repository, 'labels'), label.create_payload(), subject=label.name)

    def update_label(self, repository: str, label: Label) -> Optional[Dict[str, Any]]:
        if not label.current_name:
            raise ValueError(f"Label.current_name is required to update label {label.name!r}")
        return self._send('PATCH', self._url(repository, 'labels', label.current_name), label.update_payload())

    def delete_label(self, repository: str, name: str) -> Optional[bool]:
        return self._send('DELETE', self._url(repository, 'labels', name), decode=False)


__all__ = [
    'ClientOptions',
    'LabelClient',
]
