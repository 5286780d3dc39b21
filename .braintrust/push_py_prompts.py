#!/usr/bin/env python3
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import braintrust
from core.prompts import ArticleGenerationPrompt

# Initialize project (API key from BRAINTRUST_API_KEY env var)
project = braintrust.projects.create(name="youtube-article-monitor")

# Template variables are filled in by Braintrust at runtime
messages = [
    {"role": "system", "content": ArticleGenerationPrompt.build_system("{{{language}}}")},
    {
        "role": "user",
        "content": ArticleGenerationPrompt.build_user(
            "{{{title}}}", "{{{description}}}", "{{{transcript}}}", "{{{language}}}"
        ),
    },
]

project.prompts.create(
    slug=ArticleGenerationPrompt.SLUG,
    name=ArticleGenerationPrompt.NAME,
    description="Turns a video transcript into a WordPress-ready HTML article",
    model=ArticleGenerationPrompt.MODEL,
    params={
        "max_tokens": ArticleGenerationPrompt.MAX_TOKENS,
        "temperature": ArticleGenerationPrompt.TEMPERATURE,
    },
    messages=messages,
    if_exists="replace",
)

# Publish prompts to Braintrust
project.publish()
print("✅ Python prompts published to Braintrust")
