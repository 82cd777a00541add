# cyberguard/services/flows/prompt_instruction.py
from __future__ import annotations

"""
Satu-satunya sumber prompt yang boleh di-import modul lain.
Placeholder ``{field}`` diisi dari field input flow dengan nama yang sama.
"""

THREAT_ANALYZER_PROMPT = (
    "You are a security analyst who provides a summarized and prioritized list of "
    "potential threats based on real-time data feeds.\n\n"
    "Use the following real-time data feeds to provide the threat summary.\n\n"
    "Real-time Data Feeds: {real_time_data_feeds}"
)

SECURITY_ADVISOR_PROMPT = (
    "You are an AI security advisor. Your task is to analyze the current security "
    "state and provide actionable recommendations to achieve the desired security state.\n\n"
    "Current Security State: {current_security_state}\n"
    "Desired Security State: {desired_security_state}\n\n"
    "Provide actionable recommendations for achieving the desired security state:\n"
)

GAP_ANALYZER_PROMPT = (
    "You are an expert cybersecurity analyst specializing in gap analysis and security "
    "improvement strategies for critical infrastructure.\n"
    "Your task is to analyze the provided current and target security profiles and "
    "generate a concise gap analysis and a list of actionable recommendations.\n\n"
    "Current Security Profile Summary:\n{current_profile_summary}\n\n"
    "Target Security Profile Summary:\n{target_profile_summary}\n\n"
    "Based on this information:\n"
    "1.  **Gap Analysis:** Provide a concise analysis identifying the key gaps. Focus on "
    "discrepancies in controls, implementation levels, and coverage for the specified "
    "threats and target identifiers.\n"
    "2.  **Recommendations:** Generate a list of specific, actionable recommendations to "
    "bridge these gaps. For each recommendation:\n"
    "    *   Provide a clear title.\n"
    "    *   Describe the action in detail: what needs to be done, why it's important. "
    "Suggest specific measures, controls, or information security tools (ICS) if applicable.\n"
    "    *   Assign a priority (High, Medium, Low) based on its impact on achieving the "
    "target state and mitigating risks.\n\n"
    "The goal is to help the user understand how to move from their current security "
    "posture to the desired target posture effectively.\n"
    "Ensure your recommendations are practical and relevant to critical infrastructure "
    "environments.\n"
    "Be specific in your output, adhering to the requested output schema."
)

# Contoh isian default untuk halaman
THREAT_ANALYZER_EXAMPLE = (
    "Example: \n"
    "- Unusual outbound traffic detected from server 10.0.1.5 to IP 203.0.113.88 on port 6667 (IRC).\n"
    '- Multiple failed login attempts for user "root" on server 10.0.1.10 from IP 198.51.100.2.\n'
    "- Vulnerability CVE-2023-12345 (Remote Code Execution) reported for Apache Struts "
    "version 2.5.1 installed on web-server-01."
)

SECURITY_ADVISOR_EXAMPLE_CURRENT = (
    "Current state: \n"
    "- Endpoints have basic antivirus, but no EDR solution.\n"
    "- Firewall rules are managed manually and infrequently updated.\n"
    "- Employee security training was last conducted 2 years ago.\n"
    "- Multi-factor authentication is only enforced for admin accounts."
)

SECURITY_ADVISOR_EXAMPLE_DESIRED = (
    "Desired state: \n"
    "- All endpoints protected by EDR with centralized monitoring.\n"
    "- Firewall rules automated and dynamically updated based on threat intelligence.\n"
    "- Quarterly security awareness training for all employees.\n"
    "- MFA enforced for all user accounts and critical systems."
)
