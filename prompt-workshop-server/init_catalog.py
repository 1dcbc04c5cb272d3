"""
Seed the prompt catalog
Creates the default categories, tags and two sample templates on an empty database
"""
import asyncio

from workshop.infrastructure.database import get_session, init_db
from workshop.modules.categories import CategoryCreateInput
from workshop.modules.categories.service import CategoryService
from workshop.modules.prompts import PromptTemplateCreateInput, PromptVariable
from workshop.modules.prompts.service import PromptService
from workshop.modules.tags import TagCreateInput
from workshop.modules.tags.service import TagService

CATEGORIES = [
    CategoryCreateInput(name="Web Development", description="Prompts for web development tasks", color="#3B82F6"),
    CategoryCreateInput(
        name="Content Creation", description="Prompts for content creation and writing", color="#10B981"
    ),
]

TAGS = [
    TagCreateInput(
        name="Zero-Shot",
        description="Direct prompts without examples or additional context - ideal for idea generation, "
        "summarization, and translation",
        color="#3B82F6",
    ),
    TagCreateInput(
        name="Few-Shot",
        description="Prompts with one or more examples to help the model understand the desired input-output pairs",
        color="#10B981",
    ),
    TagCreateInput(
        name="Chain of Thought",
        description="Encourages the model to break down complex reasoning into intermediate steps "
        "for better structured output",
        color="#F59E0B",
    ),
    TagCreateInput(
        name="Zero-Shot CoT",
        description="Combines chain of thought with zero-shot prompting for better reasoning without examples",
        color="#8B5CF6",
    ),
]


def sample_templates(category_ids: dict[str, str], tag_ids: dict[str, str]) -> list[PromptTemplateCreateInput]:
    return [
        PromptTemplateCreateInput(
            name="Code Review Assistant",
            description="Reviews code and provides feedback",
            content=(
                "Please review the following {{language}} code and provide constructive feedback:\n\n"
                "{{code}}\n\nFocus on:\n- Code quality\n- Best practices\n- Performance\n- Security"
            ),
            category_id=category_ids["Web Development"],
            tag_ids=[tag_ids["Zero-Shot"], tag_ids["Chain of Thought"]],
            variables=[
                PromptVariable(name="language", description="Programming language", required=True),
                PromptVariable(name="code", description="Code to review", required=True),
            ],
        ),
        PromptTemplateCreateInput(
            name="Blog Post Generator",
            description="Generates blog post content",
            content=(
                "Write a {{word_count}} word blog post about {{topic}}.\n\n"
                "Target audience: {{audience}}\nTone: {{tone}}\n\n"
                "Include:\n- Engaging introduction\n- {{sections}} main sections\n"
                "- Conclusion with call-to-action"
            ),
            category_id=category_ids["Content Creation"],
            tag_ids=[tag_ids["Few-Shot"], tag_ids["Zero-Shot"]],
            variables=[
                PromptVariable(name="topic", description="Blog post topic", required=True),
                PromptVariable(
                    name="word_count", description="Target word count", type="number", required=True, default_value="800"
                ),
                PromptVariable(name="audience", description="Target audience", required=True, default_value="General"),
                PromptVariable(name="tone", description="Writing tone", default_value="Professional"),
                PromptVariable(
                    name="sections", description="Number of main sections", type="number", default_value="3"
                ),
            ],
        ),
    ]


async def seed_catalog():
    """Seed categories, tags and sample templates"""
    await init_db()

    async for db in get_session():
        categories = CategoryService.with_session(db)
        tags = TagService.with_session(db)
        prompts = PromptService.with_session(db)

        if await categories.list_categories() or await prompts.list_templates():
            print("Catalog already has data, nothing to seed")
            return

        category_ids = {}
        for payload in CATEGORIES:
            category = await categories.create_category(payload)
            category_ids[category.name] = category.id

        tag_ids = {}
        for payload in TAGS:
            tag = await tags.create_tag(payload)
            tag_ids[tag.name] = tag.id

        for payload in sample_templates(category_ids, tag_ids):
            await prompts.create_template(payload)
        await db.commit()

        print("=" * 50)
        print("Catalog seeded")
        print("=" * 50)
        print(f"Categories: {len(category_ids)}")
        print(f"Tags: {len(tag_ids)}")
        print("Templates: 2")
        print("=" * 50)


if __name__ == "__main__":
    asyncio.run(seed_catalog())
