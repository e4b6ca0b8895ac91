PITCH_PROMPT_VERSION = "pitch_v1"

NO_SUCCESSES_PLACEHOLDER = "No specific successful projects listed."
NO_FAILURES_PLACEHOLDER = "No specific challenging projects listed."

SUCCESS_ENTRY_TEMPLATE = (
    '- Project Name: "{name}"\n'
    "  Description: {description}\n"
    "  Key Takeaways/Learnings: {learnings}"
)

FAILURE_ENTRY_TEMPLATE = (
    '- Project Name: "{name}"\n'
    "  Description: {description}\n"
    "  What went wrong & Learnings: {learnings}\n"
    "  Recovery/Fix Plan: {fix_plan}"
)

USER_PROMPT_TEMPLATE = """You are an expert career coach and interview preparation specialist.
I need you to generate a compelling, professional interview script answering the question: "Why should we hire you?" (or "Tell me about yourself and your experience").

Here is my project history:

### SUCCESSFUL PROJECTS (Demonstrating competence and results):
{success_block}

### CHALLENGING/UNSUCCESSFUL PROJECTS (Demonstrating resilience, growth mindset, and problem solving):
{failure_block}

### INSTRUCTIONS:
1. Analyze the provided projects to identify my key technical and soft skills.
2. Synthesize a coherent narrative that weaves together my successes to show competence, and my failures to show maturity, resilience, and the ability to improve.
3. The tone should be confident, honest, and professional.
4. Provide the output as a JSON object with two fields:
   - "pitch": The full interview script/monologue.
   - "keyStrengths": An array of short bullet points summarizing my main selling points based on this data."""
