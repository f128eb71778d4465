from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models


class Income(models.Model):
    """
    Money received by the studio, optionally attributed to a project.

    The project reference carries no database constraint: deleting a project
    leaves its income rows pointing at a missing id (orphans), which the
    reconciliation tools detect and clear.
    """

    date = models.DateField()
    description = models.CharField(max_length=255)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    note = models.TextField(blank=True)
    project_income = models.BooleanField(default=False)
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name='incomes'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'incomes'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['date'], name='incomes_date_idx'),
        ]

    def __str__(self):
        return f"{self.date} {self.description}: {self.amount}"


class Expense(models.Model):
    """Money spent by the studio, optionally attributed to a project."""

    date = models.DateField()
    category = models.CharField(max_length=100)
    description = models.CharField(max_length=255)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    notes = models.TextField(blank=True)
    project_expense = models.BooleanField(default=False)
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name='expenses'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expenses'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['date'], name='expenses_date_idx'),
            models.Index(fields=['category'], name='expenses_category_idx'),
        ]

    def __str__(self):
        return f"{self.date} {self.category}: {self.amount}"


class PaymentType(models.TextChoices):
    FULL = 'full', 'Full'
    PARTIAL = 'partial', 'Partial'
    ADVANCE = 'advance', 'Advance'


class ProjectPayment(models.Model):
    """A payment event in a project's payment history."""

    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.CASCADE,
        related_name='payments'
    )
    income = models.ForeignKey(
        Income,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payments'
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    payment_date = models.DateField()
    description = models.CharField(max_length=255, blank=True)
    payment_type = models.CharField(
        max_length=20,
        choices=PaymentType.choices,
        default=PaymentType.PARTIAL
    )
    # Created by the reconciliation sweep to cover an income shortfall
    is_reconciliation = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'project_payments'
        ordering = ['-payment_date', '-created_at']

    def __str__(self):
        return f"{self.payment_date} {self.payment_type}: {self.amount}"
