"""crunchwrap publish - git initialization, GitHub publishing, backend provisioning."""

from crunchwrap.publish.firebase import provision_firebase
from crunchwrap.publish.git import Publisher, publish_project
from crunchwrap.publish.remote import GitHubRemote, Visibility, parse_remote

__all__ = [
    "GitHubRemote",
    "Publisher",
    "Visibility",
    "parse_remote",
    "provision_firebase",
    "publish_project",
]
