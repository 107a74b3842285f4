from pocketnote.core.modules.transform.models import TransformAction

SYSTEM_PROMPT = "You are a writing assistant inside a note-taking app. Reply with the resulting text only."

ACTION_INSTRUCTIONS: dict[TransformAction, str] = {
    TransformAction.FIX_GRAMMAR: (
        "Correct the grammar and spelling of the following text. "
        "Maintain the original tone and style. Return only the corrected text:"
    ),
    TransformAction.SUMMARIZE: "Summarize the following text into a concise paragraph. Return only the summary:",
    TransformAction.CONTINUE_WRITING: (
        "Continue writing the following text naturally. Add about 2-3 sentences. "
        "Return the full continued text:"
    ),
}


def build_transform_prompt(text: str, action: TransformAction) -> str:
    return f"{ACTION_INSTRUCTIONS[action]}\n\n{text}"
