"""
Prompt builder for enrichment requests.

Responsible for:
- Loading and rendering the Jinja2 prompt template
- Filtering placeholder detail values ("Not specified", "Unknown", empty)
- Including feature bullets when the scraper found any

The prompt is deterministic for a given product, so it is built once per
enrichment and reused across all candidate models.
"""

from pathlib import Path
from typing import Mapping, Optional

import structlog
from jinja2 import Environment, FileSystemLoader

from carbon_enrichment.models.product import ProductInput


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"
PROMPT_TEMPLATE_NAME = "co2_prompt.txt"

# Values the scraper uses when a detail is missing
PLACEHOLDER_VALUES = frozenset({"Not specified", "Unknown"})


def filter_details(details: Mapping[str, str]) -> list[tuple[str, str]]:
    """
    Drop detail entries whose value is empty or an explicit placeholder.
    
    Args:
        details: Detail label -> value mapping
        
    Returns:
        (label, value) pairs in the mapping's order
        
    Examples:
        >>> filter_details({"material": "Bamboo", "weight": "Not specified"})
        [('material', 'Bamboo')]
    """
    return [
        (label, value)
        for label, value in details.items()
        if value and value.strip() and value.strip() not in PLACEHOLDER_VALUES
    ]


class PromptBuilder:
    """
    Build enrichment prompts from ProductInput objects.
    """
    
    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        title_max_chars: int = 50,
        description_max_chars: int = 100,
    ):
        """
        Initialize prompt builder.
        
        Args:
            templates_dir: Directory containing the prompt template
                (defaults to the templates shipped with the package)
            title_max_chars: Title length target stated in the prompt
            description_max_chars: Description length target stated in the prompt
        """
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        self.title_max_chars = title_max_chars
        self.description_max_chars = description_max_chars
        
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,  # We're generating prompts, not HTML
            keep_trailing_newline=False,
        )
        
        try:
            self.template = self.jinja_env.get_template(PROMPT_TEMPLATE_NAME)
        except Exception as e:
            logger.error("Failed to load prompt template", error=str(e), templates_dir=str(self.templates_dir))
            raise
        
        logger.debug("PromptBuilder initialized", templates_dir=str(self.templates_dir))
    
    def build_prompt(self, product: ProductInput) -> str:
        """
        Render the enrichment prompt for a product.
        
        Args:
            product: Scraped product record
            
        Returns:
            Rendered prompt as string
        """
        details = filter_details(product.details)
        features = [feature.strip() for feature in product.about if feature and feature.strip()]
        
        rendered = self.template.render(
            title=product.title,
            description=product.description,
            details=details,
            features=features,
            title_max_chars=self.title_max_chars,
            description_max_chars=self.description_max_chars,
        ).strip()
        
        logger.debug(
            "Prompt built",
            product_id=product.id,
            details_count=len(details),
            details_filtered=len(product.details) - len(details),
            features_count=len(features),
            prompt_length=len(rendered),
        )
        
        return rendered
