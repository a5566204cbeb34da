"""Text printed to the user: banner, credentials notices and the summary."""

from __future__ import annotations

from tunnelprep.config import Settings
from tunnelprep.credentials import COPIED, PRESENT, CredentialsResult

_RULE = "=" * 46

BANNER = f"""\
{_RULE}
        Cloudflare Tunnel Creator Tool
{_RULE}"""


def _relative(settings: Settings, tunnel_id: str) -> str:
    return f"{settings.credentials_subdir}/{tunnel_id}.json"


def format_credentials_notice(
    result: CredentialsResult, settings: Settings, tunnel_id: str
) -> str:
    """Describe what happened to the credentials file."""
    rel = _relative(settings, tunnel_id)
    if result.status == COPIED:
        return f"Credentials file copied to {rel}"
    if result.status == PRESENT:
        return f"Credentials file already exists at {rel}"

    source = settings.credentials_source(tunnel_id)
    lines = [
        f"Warning: Credentials file not found at {source}",
        "You may need to fetch it manually or check the Cloudflare dashboard.",
    ]
    if result.candidates:
        lines.append("Found potential credential files:")
        lines.extend(str(path) for path in result.candidates)
        lines.append(f"Try copying one of these files to {rel}")
    return "\n".join(lines)


def format_summary(tunnel_name: str, tunnel_id: str, domain: str) -> str:
    """Return the closing summary with the manual follow-up steps."""
    return "\n".join(
        [
            "",
            _RULE,
            "        Tunnel Setup Complete",
            _RULE,
            "",
            f"Tunnel Name: {tunnel_name}",
            f"Tunnel ID:   {tunnel_id}",
            f"Domain:      {domain}",
            "",
            "IMPORTANT: DNS records will be managed by Ansible, not this tool.",
            "",
            "Next Steps:",
            "1. Get your Cloudflare Zone ID from the Cloudflare dashboard:",
            "   - Log in to Cloudflare",
            "   - Select your domain",
            "   - Zone ID is displayed on the Overview page",
            "",
            "2. Update your group_vars/all.yml with the following values:",
            "   domains:",
            f'     - domain: "{domain}"',
            '       zone_id: "YOUR_ZONE_ID_HERE"  # Replace with actual Zone ID',
            f'   tunnel_id: "{tunnel_id}"',
            "",
            "3. Run the Ansible playbook to deploy your infrastructure",
            "   and create DNS records pointing to your tunnel:",
            "   ansible-playbook playbook.yml",
            "",
            "4. After Ansible runs, you can access your services at:",
            f"   https://traefik.{domain} (reverse proxy dashboard)",
            _RULE,
        ]
    )
