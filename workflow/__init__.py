"""
Workflow Module

Contains the wizard controller, the generation pipeline nodes and prompts.
The LangGraph pipeline itself lives in workflow.graph.
"""

from workflow.wizard import GenerationWizard, WizardStore, get_wizard_store

__all__ = [
    "GenerationWizard",
    "WizardStore",
    "get_wizard_store",
]
