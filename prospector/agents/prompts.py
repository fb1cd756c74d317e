"""
Prospector - Prompt builders
Search and email-drafting prompts handed to the injected generator.

The JSON shapes described here are exactly what the response extractor and
record validator accept, so keep them in sync with prospector.models.
"""

from prospector.config import MIN_HIRE_PROBABILITY, SEARCH_RESULT_LIMIT
from prospector.models import Prospect, Service, UserProfile


# ─── SEARCH ──────────────────────────────────────────────────

SEARCH_SYSTEM_PROMPT = """You are a B2B prospect search API. Your only job is to return data
as JSON. Never include explanations, greetings or anything outside the requested JSON."""

PROSPECT_JSON_SHAPE = """{
  "id": "string (a unique UUID v4 per prospect)",
  "company_name": "string",
  "website": "string",
  "contact": {"name": "string", "title": "string", "email": "string", "phone": "string"},
  "location": "string (city/country)",
  "sector": "string",
  "address": "string (full street address of the main office)",
  "needs_analysis": "string (short analysis of why they need the service)",
  "hire_probability": "integer between %d and 100",
  "rating": {"score": "number", "reviews": "integer"}
}"""


def build_search_prompt(service: Service, sector: str, location: str,
                        limit: int = None) -> str:
    """Build the prospect search prompt for one service/sector/location."""
    limit = limit or SEARCH_RESULT_LIMIT
    shape = PROSPECT_JSON_SHAPE % (MIN_HIRE_PROBABILITY + 1)
    return f"""Find up to {limit} potential clients in the '{sector}' sector located in '{location}'
that need the service: '{service.name}' ({service.description}).

STRICT RULES:
1. MANDATORY FILTER: return ONLY prospects with a hire_probability above {MIN_HIRE_PROBABILITY}.
2. COMPLETE DATA: every field is required. For each company find a relevant decision maker
   (manager, director) with name, title and email, the company phone number, the full
   address of the main office, and an average rating with review count (use 0 if none).
3. CONTACTS: look beyond LinkedIn (maps listings, company social profiles, professional
   directories). Discard any email address that starts with 'info'.
4. ORDER: sort the result from highest to lowest hire_probability.
5. OUTPUT: respond with a JSON array ONLY. No introduction, no code fences.
   The response must start with '[' and end with ']'.

Each array element must have this shape:
{shape}
"""


# ─── EMAIL ───────────────────────────────────────────────────

EMAIL_SYSTEM_PROMPT = """You are an email drafting API. Your only job is to return a JSON object
with the keys 'subject' and 'body'. Never write anything outside the JSON object."""


def build_email_prompt(prospect: Prospect, service: Service, profile: UserProfile) -> str:
    """Build the personalised outreach email prompt for one prospect."""
    website = f"\n- Service page: {service.website}" if service.website else ""
    return f"""Write a highly personalised B2B outreach email draft.

STEP 1: RESEARCH
Research the company '{prospect.company_name}' (website: {prospect.website}). Look for recent
news, blog posts or 'about us' pages to understand their goals, challenges or current projects.
Find a specific hook that is not already in the analysis below.

STEP 2: WRITE THE EMAIL

Recipient:
- Company: {prospect.company_name}
- Contact: {prospect.contact.name} ({prospect.contact.title})
- Prior needs analysis: {prospect.needs_analysis}

Sender:
- Name: {profile.name}
- Email: {profile.email}
- Website: {profile.website}
- Service: {service.name}
- Service description: {service.description}{website}

RULES:
1. Subject: short, intriguing and specific to your research.
2. Body:
   - Greeting: "Dear {prospect.contact.name},"
   - Paragraph 1: open with something specific you found in your research.
   - Paragraph 2: connect that finding to a need and present '{service.name}' as the direct
     answer to THAT need. Be concrete.
   - Paragraph 3: a clear, low-commitment call to action (a short 15 minute call).
   - Close with "Best regards," followed by this signature, one item per line:
     {profile.name}
     {profile.email}
     {profile.website}

OUTPUT: a JSON object ONLY, starting with '{{' and ending with '}}':
{{"subject": "string", "body": "string"}}
"""


# ─── GENERATOR ADAPTER ───────────────────────────────────────

class PromptedGenerator:
    """ProspectGenerator built on any async text-completion callable.

    complete(system_prompt, prompt) -> str is the only transport dependency;
    wire it to whichever model client the deployment uses.

    Usage:
        generator = PromptedGenerator(my_client.complete)
        raw = await generator.generate_prospect_batch(service, "Law firms", "Madrid")
    """

    def __init__(self, complete, search_limit: int = None):
        self.complete = complete
        self.search_limit = search_limit

    async def generate_prospect_batch(self, service: Service, sector: str,
                                      location: str) -> str:
        prompt = build_search_prompt(service, sector, location, self.search_limit)
        return await self.complete(SEARCH_SYSTEM_PROMPT, prompt)

    async def generate_email_draft(self, prospect: Prospect, service: Service,
                                   profile: UserProfile) -> str:
        prompt = build_email_prompt(prospect, service, profile)
        return await self.complete(EMAIL_SYSTEM_PROMPT, prompt)
