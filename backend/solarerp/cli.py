# Overview: Flask CLI command groups for bootstrap, inspection, and permission checks.

# backend/solarerp/cli.py
# Commands Legend (run from the repository root):
# Prereqs:
# - Activate your virtualenv and `pip install -e .`
# - Set FLASK_APP=solarerp:create_app
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init [--password "Password123"]
#   Idempotent bootstrap: creates tables, head office + one branch, one user per role.
# - python -m flask system seed-demo
#   Add sample partners and catalog products for trying out barter.
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Users:
# - python -m flask users list [--role cashier]
# - python -m flask users create --username x --email x@y --password "Password123" --role cashier
#
# Permissions (static table, nothing stored):
# - python -m flask perms list [--role cashier] [--category SALES]
# - python -m flask perms check cashier1 use_pos
# - python -m flask perms validate

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import db
from .models import Branch, Partner, Product, User
from .permissions import (
    CapabilityCategory,
    ConfigurationError,
    Role,
    get_capabilities_by_category,
    validate_capability_code,
    validate_permission_table,
)
from .services import permission_service
from .services.auth_service import PasswordValidationError, create_user
from .validation import ValidationError


DEFAULT_PASSWORD = "Password123"

# (username, full_name, email, role, branch_code)
DEFAULT_USERS = [
    ("admin", "System Administrator", "admin@solarerp.local", Role.SUPER_ADMIN, None),
    ("branch1", "Branch One Manager", "branch1@solarerp.local", Role.BRANCH_MANAGER, "BR1"),
    ("sales1", "Sales Manager", "sales@solarerp.local", Role.SALES_MANAGER, None),
    ("inventory1", "Inventory Manager", "inventory@solarerp.local", Role.INVENTORY_MANAGER, None),
    ("cashier1", "Branch One Cashier", "cashier@solarerp.local", Role.CASHIER, "BR1"),
    ("partner1", "Partner Manager", "partner@solarerp.local", Role.PARTNER_MANAGER, None),
    ("installer1", "Installation Lead", "installer@solarerp.local", Role.INSTALLER, "BR1"),
]

DEMO_PARTNERS = [
    ("Solar Tech Egypt", "contact@solartechegypt.com"),
    ("Green Energy Solutions", "contact@greenenergysolutions.com"),
    ("Inverter Pro Egypt", "contact@inverterproegypt.com"),
]

# (sku, name, category, unit, sell_price, min_sell_price) in piasters
DEMO_PRODUCTS = [
    ("CH-GRD-01", "Ground Mount Chassis", "factory1_chassis", "piece", 350_000, 300_000),
    ("CB-DC-6", "DC Cable 6mm Copper", "factory2_cable_dc", "meter", 5_100, 4_200),
    ("PV-550", "Mono Solar Panel 550W", "import_solar_panel", "piece", 550_000, 480_000),
]


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@click.option('--password', default=DEFAULT_PASSWORD, show_default=True, help='Password for seeded users')
@with_appcontext
def init_system(password):
    """
    Initialize tables, branches and one default user per role.

    SECURITY: Change passwords immediately in production!
    """
    click.echo("START Initializing Solar ERP...")
    db.create_all()

    branches = {}
    for code, name, is_hq in (("HQ", "Head Office", True), ("BR1", "Branch 1", False)):
        branch = db.session.query(Branch).filter_by(code=code).first()
        if not branch:
            branch = Branch(code=code, name=name, is_hq=is_hq)
            db.session.add(branch)
            db.session.commit()
            click.echo(f"PASS Created branch {code}")
        branches[code] = branch

    for username, full_name, email, role, branch_code in DEFAULT_USERS:
        if db.session.query(User).filter_by(username=username).first():
            click.echo(f"SKIP User '{username}' already exists")
            continue
        try:
            create_user(
                username=username,
                email=email,
                password=password,
                role=role,
                full_name=full_name,
                branch_id=branches[branch_code].id if branch_code else None,
            )
        except (ValidationError, PasswordValidationError) as e:
            raise click.ClickException(f"Could not create '{username}': {e}")
        click.echo(f"PASS Created user '{username}' ({role.value})")

    click.echo("DONE System initialized.")


@system_group.command('seed-demo')
@with_appcontext
def seed_demo():
    """Add sample partners and products (idempotent)."""
    for name, email in DEMO_PARTNERS:
        if not db.session.query(Partner).filter_by(name=name).first():
            db.session.add(Partner(name=name, email=email))
            click.echo(f"PASS Partner '{name}'")

    for sku, name, category, unit, sell_price, min_sell_price in DEMO_PRODUCTS:
        if not db.session.query(Product).filter_by(sku=sku).first():
            db.session.add(Product(
                sku=sku,
                name=name,
                category=category,
                unit=unit,
                sell_price=sell_price,
                min_sell_price=min_sell_price,
            ))
            click.echo(f"PASS Product '{sku}'")

    db.session.commit()


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    db.drop_all()
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask system init' to initialize.")


@click.group('users')
def users_group():
    """User inspection and creation."""


@users_group.command('create')
@click.option('--username', prompt=True, help='Username')
@click.option('--email', prompt=True, help='Email address')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
@click.option('--role', type=click.Choice([r.value for r in Role]), prompt=True, help='Role')
@click.option('--full-name', help='Display name')
@click.option('--branch-id', type=int, help='Branch ID (omit for head office)')
@with_appcontext
def create_user_cli(username, email, password, role, full_name, branch_id):
    """Create a user with one role."""
    try:
        user = create_user(
            username=username,
            email=email,
            password=password,
            role=role,
            full_name=full_name,
            branch_id=branch_id,
        )
    except (ValidationError, PasswordValidationError) as e:
        raise click.ClickException(str(e))

    click.echo(f"PASS Created user '{user.username}' (ID: {user.id}, role: {user.role.value})")


@users_group.command('list')
@click.option('--role', type=click.Choice([r.value for r in Role]), help='Filter by role')
@with_appcontext
def list_users(role):
    """List users with their role."""
    query = db.session.query(User)
    if role:
        query = query.filter(User.role == Role(role))

    users = query.order_by(User.id).all()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "=" * 90)
    click.echo(f"{'ID':<5} {'Username':<20} {'Email':<30} {'Active':<8} {'Role'}")
    click.echo("=" * 90)

    for user in users:
        active_str = "Yes" if user.is_active else "No"
        click.echo(f"{user.id:<5} {user.username:<20} {user.email:<30} {active_str:<8} {user.role.value}")

    click.echo("=" * 90 + "\n")


def _category_names():
    return sorted(v for k, v in vars(CapabilityCategory).items() if not k.startswith('_'))


@click.group('perms')
def perms_group():
    """Inspect the static role/capability table."""


@perms_group.command('list')
@click.option('--role', type=click.Choice([r.value for r in Role]), help='Show one role')
@click.option('--category', type=click.Choice(_category_names()), help='Filter by category')
@with_appcontext
def list_permissions_cli(role, category):
    """List capabilities, optionally for one role or one category."""
    resolver = permission_service.get_resolver()

    if role:
        permission_set = resolver.get_permissions(role)
        click.echo(f"\nCapabilities for role: {role}")
        click.echo("-" * 60)
        for code, granted in permission_set.to_dict().items():
            click.echo(f"  {code:<24} {'yes' if granted else 'no'}")
        click.echo(f"\n Granted: {len(permission_set.granted())}\n")
        return

    categories = [category] if category else _category_names()
    for cat in categories:
        click.echo(f"CATEGORY {cat}")
        for capability in get_capabilities_by_category(cat):
            roles = ", ".join(r.value for r in resolver.roles_with(capability.code))
            click.echo(f"  {capability.code:<24} {capability.name:<24} {roles}")


@perms_group.command('check')
@click.argument('username')
@click.argument('capability')
@with_appcontext
def check_permission_cli(username, capability):
    """Check if a user's role grants a capability."""
    user = db.session.query(User).filter_by(username=username).first()
    if not user:
        raise click.ClickException(f"User '{username}' not found")

    if not validate_capability_code(capability):
        raise click.ClickException(f"Unknown capability '{capability}'")

    if permission_service.user_has_permission(user, capability):
        click.echo(f"PASS User '{username}' ({user.role.value}) HAS '{capability}'")
    else:
        click.echo(f"FAIL User '{username}' ({user.role.value}) DOES NOT HAVE '{capability}'")


@perms_group.command('validate')
@with_appcontext
def validate_permissions_cli():
    """Validate the app's role/capability table; exits non-zero on a defect."""
    table = permission_service.get_resolver().table
    try:
        validate_permission_table(table)
    except ConfigurationError as e:
        current_app.logger.critical("Permission table invalid: %s", e)
        raise click.ClickException(str(e))
    click.echo(f"PASS {len(table)} roles, every role has a complete permission set")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
    app.cli.add_command(perms_group)
