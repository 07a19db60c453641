from __future__ import annotations

"""
Prompt Templates for Architectural Explanations.

The file template mandates a fixed multi-section markdown answer ending in a
Mermaid dependency diagram; the folder template asks for a short purpose
statement.
"""

from typing import List

from archinspector.domain.constants import SELECTION_MARKER

NO_STRUCTURE_TEXT = "Project structure not available."
EMPTY_FILE_TEXT = "// This file is empty."
EMPTY_FOLDER_TEXT = "This folder is empty."

BINARY_FILE_TEMPLATE = """### Binary File: {name}

This file has been identified as a binary file and its contents cannot be displayed or analyzed.
Binary files are typically compiled code, images, or other non-text formats.
"""

FOLDER_PROMPT_TEMPLATE = """You are an expert software architect. Provide a high-level explanation for the following folder.

Folder Path: {path}
Folder Contents: {contents}

Based on its name and the files/folders it contains, what is the primary purpose of this folder?
Describe its role within a typical project structure. Keep the explanation concise and clear.
Use markdown for formatting.
"""

FILE_PROMPT_TEMPLATE = """You are an expert Principal Software Architect, renowned for your ability to understand complex codebases at a glance. Your task is to analyze a single file within the context of its entire project. Your analysis must be deep, relational, and architectural. Do not simply describe the code; explain its purpose and connections.

**CONTEXT: Full Project File Structure**
A text representation of the project is provided below. The '{marker}' marker indicates the file currently under review. Use this tree to understand the file's location, its neighbors, and the overall project layout.

```
{structure}
```

**SUBJECT: File for Analysis**
- **Path:** `{path}`
- **Source Code:**
```
{content}
```

---

**YOUR MANDATE: Provide a Multi-faceted Analysis (Use Markdown)**

Your response MUST follow this structure precisely:

### 1. Executive Summary
A concise, one-sentence summary of this file's primary responsibility.

### 2. Architectural Significance
This is the most critical part of your analysis. Explain how this file fits into the project's architecture.
- **Role & Pattern:** What is the file's architectural role (e.g., UI View Component, Business Logic Service, Data Model, Configuration, Utility)? Does it implement a specific design pattern (e.g., Singleton, Factory, Middleware)?
- **Dependencies & Collaborators:**
    - Based on its code and the file tree, what are its primary **incoming dependencies** (i.e., other files it imports/requires)?
    - Who are its primary **collaborators** or **consumers** (i.e., what other files likely import and use this one)? Refer to specific paths from the file tree.
- **Data Flow:** How does data flow into and out of this file? Does it receive arguments, call APIs, emit events, or query a database? Explain its position in the application's overall data flow.
- **Justification for Location:** Explain why this file is located at `{path}`. How does its placement reflect its role?

### 3. Core Logic Breakdown
Briefly describe the purpose of the main functions, classes, or components within the file. Focus on the "what" and "why," not just re-stating the code.

### 4. Visual Dependency Map (Mermaid)
Generate a MermaidJS `graph TD` diagram illustrating this file's key relationships.
- The diagram should focus on the most important interactions (e.g., `app.py --> routes.py`, `routes.py --> service.py`).
- **CRITICAL SYNTAX RULES:**
    - Use simple, alphanumeric node IDs (e.g., `App`, `Routes`, `TreeService`).
    - Node labels MUST be quoted strings containing the file path (e.g., `App["/src/app.py"]`).
    - Edge labels (text on arrows) MUST be a single, concise, quoted string. Example: `A -- "sends data to" --> B`. Do NOT use commas or multiple labels on a single edge.
    - If a diagram is not relevant for this file (e.g., a simple config file), write "No diagram needed for this file." instead of a mermaid block.
- Enclose the final diagram in a ```mermaid``` code block.
"""


def build_file_prompt(path: str, content: str, structure: str) -> str:
    """Fill the file-analysis template."""
    return FILE_PROMPT_TEMPLATE.format(
        marker=SELECTION_MARKER.strip(),
        structure=(structure or NO_STRUCTURE_TEXT).rstrip("\n"),
        path=path,
        content=content or EMPTY_FILE_TEXT,
    )


def build_folder_prompt(path: str, child_names: List[str]) -> str:
    """Fill the folder-analysis template."""
    contents = ", ".join(child_names) if child_names else EMPTY_FOLDER_TEXT
    return FOLDER_PROMPT_TEMPLATE.format(path=path, contents=contents)


def build_binary_explanation(name: str) -> str:
    """Fixed answer for binary files; no model is consulted."""
    return BINARY_FILE_TEMPLATE.format(name=name)
