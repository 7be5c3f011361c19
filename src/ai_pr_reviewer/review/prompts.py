from ai_pr_reviewer.models.diff import DiffFile
from ai_pr_reviewer.models.review import PromptVariant, ReviewContext


PROMPT_VERSION = "2"

EMPTY_MARKER = "(none)"


STRUCTURED_INSTRUCTIONS = """Your task is to review pull requests. Instructions:
- Provide the response in following JSON format: {{"reviews": [{{"lineNumber": <line_number>, "reviewTitle": "<review title>", "reviewComment": "<review comment>", "improveDiff": "<improve diff>"}}]}}
- Use EXACTLY the line numbers shown before each diff line.
- Start every reviewTitle with one severity tag: [CRITICAL], [WARNING] or [SUGGESTION].
- Do not give positive comments or compliments.
- Provide comments and suggestions ONLY if there is something to improve, otherwise "reviews" should be an empty array.
- Write the comment in GitHub Markdown format.
- Do not generate JSON code blocks.
- Use the given description and document only for the overall context and only comment the code.
- IMPORTANT: NEVER suggest adding comments to the code.
- Write in {language}."""


NARRATIVE_INSTRUCTIONS = """Review the following diff and write in {language} using GitHub Markdown:

- 1. Changes
- 2. Test items / how to verify the changes
- 3. Suggestions for variable names, function names, alternative features or methods

Tag every suggestion with one severity tag: [CRITICAL], [WARNING] or [SUGGESTION].
Do not give positive comments or compliments."""


STRUCTURED_BODY = """Review the following code diff in the file "{file_path}" and take the pull request title and description into account when writing the response.

Pull request title: {title}
Pull request description:

---
{description}
---

Git diff to review:

```diff
{diff}
```

Document:
```markdown
{document}
```
"""


NARRATIVE_BODY = """File: {file_path}

```diff
{diff}
```

Document:
```markdown
{document}
```
"""


SUMMARY_PROMPT = """Summarize the following code review for a Slack message in {language}.
Keep it to a few short bullet points, most important findings first.

{report}"""


def _or_marker(text: str | None) -> str:
    if text is None or not text.strip():
        return EMPTY_MARKER
    return text.strip()


def build_review_prompt(
    file: DiffFile,
    context: ReviewContext,
    variant: PromptVariant = PromptVariant.STRUCTURED,
) -> str:
    """Build the complete prompt for reviewing one file.

    Output depends only on the arguments, so the same file and context
    always produce the same text.
    """
    document = _or_marker(context.document)
    diff = file.render_lines()

    if variant is PromptVariant.NARRATIVE:
        instructions = NARRATIVE_INSTRUCTIONS.format(language=context.language)
        body = NARRATIVE_BODY.format(file_path=file.path, diff=diff, document=document)
    else:
        instructions = STRUCTURED_INSTRUCTIONS.format(language=context.language)
        body = STRUCTURED_BODY.format(
            file_path=file.path,
            title=_or_marker(context.title),
            description=_or_marker(context.description),
            diff=diff,
            document=document,
        )

    return f"{instructions}\n\n{body}"


def build_summary_prompt(report: str, language: str) -> str:
    return SUMMARY_PROMPT.format(language=language, report=report)
