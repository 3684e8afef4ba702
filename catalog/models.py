from django.core.validators import MinLengthValidator
from django.db import models
from django.urls import reverse


class Genre(models.Model):
    name = models.CharField(max_length=100, validators=[MinLengthValidator(3)])

    def get_absolute_url(self):
        return reverse('genre-detail', args=[str(self.pk)])

    url = property(get_absolute_url)

    def __str__(self):
        return self.name


class Author(models.Model):
    first_name = models.CharField(max_length=100)
    family_name = models.CharField(max_length=100)
    date_of_birth = models.DateField(null=True, blank=True)
    date_of_death = models.DateField(null=True, blank=True)

    @property
    def name(self):
        if not self.first_name or not self.family_name:
            return ''
        return f'{self.family_name}, {self.first_name}'

    @property
    def lifespan(self):
        birth = str(self.date_of_birth.year) if self.date_of_birth else ''
        death = str(self.date_of_death.year) if self.date_of_death else ''
        if not birth and not death:
            return ''
        return f'{birth} - {death}'.strip()

    def get_absolute_url(self):
        return reverse('author-detail', args=[str(self.pk)])

    url = property(get_absolute_url)

    def __str__(self):
        return self.name


class Book(models.Model):
    title = models.CharField(max_length=200)
    # Deleting an Author with books is refused by the delete handlers
    author = models.ForeignKey(Author, on_delete=models.PROTECT, related_name='books')
    summary = models.TextField()
    isbn = models.CharField('ISBN', max_length=20)
    genre = models.ManyToManyField(Genre, blank=True, related_name='books')

    def get_absolute_url(self):
        return reverse('book-detail', args=[str(self.pk)])

    url = property(get_absolute_url)

    def __str__(self):
        return self.title


class BookInstance(models.Model):
    AVAILABLE = 'Available'
    MAINTENANCE = 'Maintenance'
    LOANED = 'Loaned'
    RESERVED = 'Reserved'

    STATUS_CHOICES = [
        (AVAILABLE, AVAILABLE),
        (MAINTENANCE, MAINTENANCE),
        (LOANED, LOANED),
        (RESERVED, RESERVED),
    ]

    book = models.ForeignKey(Book, on_delete=models.PROTECT, related_name='instances')
    imprint = models.CharField(max_length=200)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=MAINTENANCE)
    due_back = models.DateField(null=True, blank=True)

    def get_absolute_url(self):
        return reverse('bookinstance-detail', args=[str(self.pk)])

    url = property(get_absolute_url)

    @property
    def due_back_formatted(self):
        return self.due_back.strftime('%b %d, %Y') if self.due_back else ''

    def __str__(self):
        return f'{self.imprint} ({self.status})'
