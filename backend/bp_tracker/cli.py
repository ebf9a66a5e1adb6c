"""
Interactive blood pressure tracker.
Run: bp-tracker [--data-file PATH]
"""
import logging
import click
from bp_tracker.storage import CsvEntryStore, StorageError
from bp_tracker.utils.classification import classify_bp
from bp_tracker.utils.statistics import summarize
from bp_tracker.utils.validators import (
    INTERACTIVE_DEFAULTS,
    MEASUREMENT_RANGES,
    parse_timestamp,
    validate_measurement,
    validate_reading,
)

logger = logging.getLogger(__name__)

MENU = """=== Blood Pressure Tracker ===
1. Add new entry
2. View all entries
3. View statistics
4. Exit"""

MEASUREMENT_PROMPTS = {
    'systolic': 'Systolic (mmHg, {low}-{high})',
    'diastolic': 'Diastolic (mmHg, {low}-{high})',
    'heart_rate': 'Heart Rate (bpm, {low}-{high})',
}


def prompt_measurement(field):
    """Ask for a numeric field until the answer is in range."""
    _, low, high, _ = MEASUREMENT_RANGES[field]
    text = MEASUREMENT_PROMPTS[field].format(low=low, high=high)
    while True:
        value = click.prompt(text, default='', show_default=False).strip()
        rejection = validate_measurement(field, value)
        if rejection is None:
            return value
        click.echo(f'Please enter a valid number. {rejection.message}')


def prompt_timestamp(default_text):
    while True:
        value = click.prompt(
            'Date/Time (press Enter for now, or enter YYYY-MM-DD HH:MM:SS)',
            default='', show_default=False,
        ).strip()
        if not value:
            return default_text
        if parse_timestamp(value) is not None:
            return value
        click.echo('Please use the YYYY-MM-DD HH:MM:SS format')


def add_entry(store, defaults=INTERACTIVE_DEFAULTS):
    click.echo('\n=== New Blood Pressure Entry ===\n')

    default_text = defaults.timestamp().strftime('%Y-%m-%d %H:%M:%S')
    click.echo(f'Default: {default_text}')
    data = {'timestamp': prompt_timestamp(default_text)}
    data['systolic'] = prompt_measurement('systolic')
    data['diastolic'] = prompt_measurement('diastolic')
    data['heartRate'] = prompt_measurement('heart_rate')
    data['location'] = click.prompt("Location (e.g., Home, Doctor's Office)", default=defaults.location)
    data['notes'] = click.prompt('Notes (optional)', default='', show_default=False)

    result = validate_reading(data, defaults)
    if not result.ok:
        click.echo(result.rejection.message)
        return None

    created = store.create(result.reading)
    category = classify_bp(created.systolic, created.diastolic)
    click.echo('\nEntry saved successfully!\n')
    click.echo(f'BP: {created.systolic}/{created.diastolic} mmHg - {category}')
    click.echo(f'Heart Rate: {created.heart_rate} bpm\n')
    return created


def format_entries(readings):
    lines = [f"{'ID':>4}  {'Date/Time':<19}  {'BP':>7}  {'HR':>3}  {'Category':<16}  Location / Notes"]
    for r in readings:
        bp = f'{r.systolic}/{r.diastolic}'
        category = classify_bp(r.systolic, r.diastolic)
        extra = r.location if not r.notes else f'{r.location} / {r.notes}'
        lines.append(f'{r.id:>4}  {r.timestamp_text:<19}  {bp:>7}  {r.heart_rate:>3}  {category:<16}  {extra}')
    return '\n'.join(lines)


def view_entries(store):
    readings = store.list_all()
    if not readings:
        click.echo('\nNo entries found. Add your first entry!\n')
        return
    click.echo('\n=== Blood Pressure History ===\n')
    click.echo(format_entries(readings))
    click.echo(f'\nTotal entries: {len(readings)}\n')


def format_summary(summary):
    sys_, dia, hr = summary.systolic, summary.diastolic, summary.heart_rate
    return '\n'.join([
        '=== Statistics ===',
        '',
        f'Total Readings: {summary.count}',
        '',
        'Blood Pressure (mmHg):',
        f'  Average: {sys_.rounded_average}/{dia.rounded_average}',
        f'  Highest: {sys_.maximum}/{dia.maximum}',
        f'  Lowest:  {sys_.minimum}/{dia.minimum}',
        '',
        'Heart Rate (bpm):',
        f'  Average: {hr.rounded_average}',
        f'  Highest: {hr.maximum}',
        f'  Lowest:  {hr.minimum}',
    ])


def view_stats(store):
    summary = summarize(store.list_all())
    if summary is None:
        click.echo('\nNo data available yet.\n')
        return
    click.echo('\n' + format_summary(summary) + '\n')


def run_menu(store, defaults=INTERACTIVE_DEFAULTS):
    actions = {
        '1': lambda: add_entry(store, defaults),
        '2': lambda: view_entries(store),
        '3': lambda: view_stats(store),
    }
    while True:
        click.echo(MENU)
        choice = click.prompt('\nSelect option (1-4)', default='', show_default=False).strip()
        if choice == '4':
            click.echo('\nGoodbye! Stay healthy!\n')
            return
        action = actions.get(choice)
        if action is None:
            click.echo('\nInvalid option. Please try again.\n')
            continue
        try:
            action()
        except StorageError as e:
            logger.error(f'Storage failure: {e}')
            click.echo(f'\nCould not access the data file: {e}\n', err=True)


@click.command()
@click.option('--data-file', envvar='BP_DATA_FILE', default='bp_data.csv', show_default=True,
              help='CSV file readings are stored in.')
def main(data_file):
    """Record and review blood pressure readings."""
    click.echo('\nBlood Pressure Tracker\n')
    run_menu(CsvEntryStore(data_file))


if __name__ == '__main__':
    main()
