"""
Output Parser - Pull a JSON object out of a raw LLM reply.
"""
import json
import re


def extract_json(raw_output: str) -> dict:
    """
    Parse the JSON object in an LLM reply.
    
    Handles replies wrapped in ```json fences, surrounding prose and
    trailing commas.
    
    Raises:
        json.JSONDecodeError: If no JSON object can be parsed
    """
    if not raw_output or not raw_output.strip():
        raise json.JSONDecodeError("Empty response", raw_output or "", 0)
    
    text = raw_output.strip()
    
    # Remove markdown code blocks if present
    if '```' in text:
        parts = text.split('```')
        if len(parts) >= 3:
            text = parts[1]
            if text.startswith('json'):
                text = text[4:]
    text = text.strip()
    
    # Keep the outermost object if the model added prose around it
    start = text.find('{')
    end = text.rfind('}')
    if start != -1 and end > start:
        text = text[start:end + 1]
    
    # Fix trailing commas before closing brackets
    text = re.sub(r',\s*}', '}', text)
    text = re.sub(r',\s*]', ']', text)
    
    data = json.loads(text)
    if not isinstance(data, dict):
        raise json.JSONDecodeError(f"Expected a JSON object, got {type(data).__name__}", text, 0)
    return data
