from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class ProjectStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    ACTIVE = 'ACTIVE', 'Active'
    IN_PROGRESS = 'IN_PROGRESS', 'In progress'
    ON_HOLD = 'ON_HOLD', 'On hold'
    COMPLETED = 'COMPLETED', 'Completed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class PaymentStatus(models.TextChoices):
    """Client-facing payment classification of a project."""
    ONGOING = 'ongoing', 'Ongoing'
    PENDING = 'pending', 'Pending'
    COMPLETED = 'completed', 'Completed'


def money_field(**kwargs):
    kwargs.setdefault('default', Decimal('0.00'))
    return models.DecimalField(max_digits=12, decimal_places=2, **kwargs)


class Project(models.Model):
    """
    A shoot commissioned by a client.

    ``received_amt``, ``pending_amt`` and ``profit`` are materialized from the
    project's income, expense and payment rows and are only written by
    ``apps.projects.services.financials``.
    """

    code = models.CharField(max_length=30, unique=True, null=True, blank=True, editable=False)
    name = models.CharField(max_length=200, blank=True)
    company = models.CharField(max_length=200, blank=True)
    type = models.CharField(max_length=100, blank=True)
    status = models.CharField(
        max_length=20,
        choices=ProjectStatus.choices,
        default=ProjectStatus.PENDING,
        db_index=True
    )

    shoot_start_date = models.DateField(null=True, blank=True)
    shoot_end_date = models.DateField(null=True, blank=True)
    location = models.CharField(max_length=255, blank=True)
    address = models.TextField(blank=True)
    reference = models.TextField(blank=True)

    client = models.ForeignKey(
        'clients.Client',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='projects'
    )

    amount = money_field(validators=[MinValueValidator(Decimal('0.00'))])

    # Outsourcing
    outsourcing = models.BooleanField(default=False)
    outsourcing_amt = money_field(validators=[MinValueValidator(Decimal('0.00'))])
    out_for = models.CharField(max_length=200, blank=True)
    out_client = models.CharField(max_length=200, blank=True)
    outsourcing_paid = models.BooleanField(default=False)

    # Derived financials
    received_amt = money_field()
    pending_amt = money_field()
    profit = money_field()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['type'], name='projects_type_idx'),
            models.Index(fields=['company'], name='projects_company_idx'),
        ]

    def __str__(self):
        return f"{self.code or 'unsaved'} - {self.name}"

    @staticmethod
    def generate_code(project_id):
        """Project codes are '<prefix>-<id>', e.g. CYM-42."""
        return f"{settings.PROJECT_CODE_PREFIX}-{project_id}"

    @property
    def payment_status(self):
        if self.status == ProjectStatus.COMPLETED or self.pending_amt <= 0:
            return PaymentStatus.COMPLETED
        if self.status == ProjectStatus.ACTIVE:
            return PaymentStatus.ONGOING
        return PaymentStatus.PENDING
