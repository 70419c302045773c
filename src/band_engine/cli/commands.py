"""
CLI Commands

Command-line tool for content authors: check answer keys against sample
answers and preview the bands a result would earn.
"""

import json
import sys
from pathlib import Path

import click
from rich.markup import escape

from ..core.config import get_config, reload_config
from ..core.exceptions import BandEngineException
from ..evaluation.evaluator import AnswerEvaluator
from ..scoring.band_scorer import BandScorer, overall_band
from ..types import Question, QuestionType, SkillArea
from ..utils.logging import setup_logging, get_logger
from .formatting import (
    console,
    display_error,
    format_band,
    format_question_types,
    format_score_panel,
    format_section_results,
)
from .loader import load_question_set

logger = get_logger(__name__)

SKILL_CHOICE = click.Choice([skill.value for skill in SkillArea], case_sensitive=False)


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """Band Engine - answer evaluation and band scoring for reading and listening."""
    ctx.ensure_object(dict)

    try:
        app_config = reload_config(Path(config)) if config else get_config()

        if verbose:
            app_config.logging.level = 'DEBUG'
            app_config.logging.console_level = 'DEBUG'
        setup_logging(app_config)

        ctx.obj['config'] = app_config
        ctx.obj['evaluator'] = AnswerEvaluator.from_config(app_config)
    except BandEngineException as e:
        display_error(str(e), "Configuration Error")
        sys.exit(1)


@cli.command()
@click.argument('question_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--skill', type=SKILL_CHOICE, default=None,
              help='Override the skill named in the file')
@click.option('--json', 'as_json', is_flag=True, help='Print the report as JSON')
@click.pass_context
def evaluate(ctx, question_file, skill, as_json):
    """Evaluate the answers in QUESTION_FILE and report the band."""
    evaluator: AnswerEvaluator = ctx.obj['evaluator']

    try:
        file_skill, questions, answers = load_question_set(question_file)
    except BandEngineException as e:
        logger.error(f"Rejected question set {question_file}: {e}")
        display_error(str(e), "Invalid Question Set")
        sys.exit(1)

    section_skill = SkillArea.parse(skill, default=file_skill)
    report = evaluator.evaluate_section(answers, questions, section_skill)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2, default=str))
        return

    console.print(format_section_results(report))
    console.print(format_question_types(report))
    console.print(format_score_panel(
        evaluator.scorer.score(report.correct_count, report.total_questions, section_skill)
    ))


@cli.command()
@click.argument('correct', type=int)
@click.argument('total', type=int)
@click.option('--skill', type=SKILL_CHOICE, default=SkillArea.READING.value, show_default=True)
@click.option('--json', 'as_json', is_flag=True, help='Print the report as JSON')
def score(correct, total, skill, as_json):
    """Convert CORRECT out of TOTAL into an accuracy and band."""
    report = BandScorer().score(correct, total, skill)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    console.print(format_score_panel(report))


@cli.command()
@click.argument('answer')
@click.argument('correct_answers', nargs=-1, required=True)
@click.option('--type', 'question_type', default=QuestionType.FILL_BLANK.value, show_default=True,
              help='Question type, e.g. multiple_choice, form_completion')
@click.option('--skill', type=SKILL_CHOICE, default=SkillArea.READING.value, show_default=True)
@click.pass_context
def check(ctx, answer, correct_answers, question_type, skill):
    """Check a single ANSWER against one or more CORRECT_ANSWERS."""
    evaluator: AnswerEvaluator = ctx.obj['evaluator']
    question = Question(
        question_type=question_type,
        correct_answers=correct_answers,
        skill_area=skill,
    )
    result = evaluator.evaluate(answer, question)

    if result.is_correct:
        console.print(f"[green]{result.explanation}[/green] (rule: {result.match_type})")
        return

    console.print(f"[red]{escape(result.explanation)}[/red]", highlight=False)
    suggestion = evaluator.matcher.suggest_closest(answer, question.correct_answers)
    if suggestion is not None:
        closest, closeness = suggestion
        console.print(f"Closest accepted answer: {closest} ({closeness:.0%} similar)",
                      markup=False)


@cli.command()
@click.argument('bands', nargs=-1, type=float, required=True)
def overall(bands):
    """Average module BANDS into an overall band (nearest half band)."""
    click.echo(format_band(overall_band(bands)))


if __name__ == '__main__':
    cli()
