"""Integration tests for end-to-end workflows."""

from fintrack.cli.main import cli


def _created_id(output: str) -> str:
    # "Created account 'Name' (ID: abc)" or "Created transaction abc"
    first = output.splitlines()[0]
    if "ID:" in first:
        return first.split("ID:")[1].strip().rstrip(")")
    return first.rsplit(" ", 1)[1]


def test_full_workflow(cli_runner, temp_db_path):
    """Test complete workflow: account → transactions → goal → insights → dashboard."""
    base = ["--db-path", temp_db_path, "--no-seed"]

    # Step 1: Create account
    result = cli_runner.invoke(cli, base + ["account", "add", "Everyday", "--balance", "3000"])
    assert result.exit_code == 0
    account_id = _created_id(result.output)

    # Step 2: Record spending and income
    for description, amount, category, day, txn_type in [
        ("Rent", "900", "Bills & Utilities", "2026-09-01", "expense"),
        ("Groceries", "150", "Food & Dining", "2026-09-12", "expense"),
        ("Groceries", "120", "Food & Dining", "2026-10-04", "expense"),
        ("Cinema", "30", "", "2026-10-10", "expense"),
        ("Salary", "3000", "Salary", "2026-10-01", "income"),
    ]:
        result = cli_runner.invoke(
            cli,
            base
            + [
                "transaction", "add",
                "--description", description,
                "--amount", amount,
                "--category", category,
                "--date", day,
                "--type", txn_type,
                "--account", "Everyday",
            ],
        )
        assert result.exit_code == 0, result.output

    # Step 3: Goal reaches its target
    result = cli_runner.invoke(cli, base + ["goal", "add", "Buffer", "--target", "500"])
    goal_id = _created_id(result.output)
    result = cli_runner.invoke(cli, base + ["goal", "update", goal_id, "--current", "500"])
    assert "Goal reached!" in result.output

    # Step 4: Insights over three months
    result = cli_runner.invoke(cli, base + ["insights", "--months", "3", "--as-of", "2026-10-18"])
    assert result.exit_code == 0
    assert "1,200.00" in result.output
    assert "-85.7%" in result.output
    assert "Other" in result.output

    # Step 5: Dashboard
    result = cli_runner.invoke(cli, base + ["dashboard", "--as-of", "2026-10-18"])
    assert result.exit_code == 0
    assert "150.00" in result.output
    assert "95%" in result.output
    assert "1/1" in result.output

    # Step 6: Deleting the account keeps its transactions
    result = cli_runner.invoke(cli, base + ["account", "delete", account_id, "--yes"])
    assert result.exit_code == 0
    result = cli_runner.invoke(cli, base + ["transaction", "list"])
    assert len([line for line in result.output.splitlines() if "|" in line]) == 5
